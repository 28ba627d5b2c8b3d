from __future__ import annotations

from typing import Optional

from ..audio import AudioPayload
from ..settings import RecognitionSettings
from .providers.audiotag import AudioTagProvider
from .providers.base import RecognitionProvider
from .providers.mock import MockRecognitionProvider
from .types import RecognitionOutcome


class RecognitionService:
    """Coordinates recognition provider usage."""

    def __init__(self, *, provider: Optional[RecognitionProvider] = None) -> None:
        self._provider = provider or MockRecognitionProvider()

    @classmethod
    def from_settings(cls, cfg: RecognitionSettings | None) -> "RecognitionService":
        provider: Optional[RecognitionProvider] = None
        if cfg is not None:
            provider_name = (cfg.provider or "audiotag").strip().lower()
            if provider_name in {"mock", "fake"}:
                provider = MockRecognitionProvider(match=cfg.mock_match)
            elif provider_name in {"audiotag", "audiotag.info"}:
                provider = AudioTagProvider(
                    api_url=cfg.audiotag.api_url,
                    api_token=cfg.audiotag.api_token,
                    timeout=cfg.audiotag.timeout,
                )
            else:
                raise RuntimeError(f"unsupported recognition provider: {cfg.provider}")
        return cls(provider=provider)

    async def recognize(self, payload: AudioPayload) -> RecognitionOutcome:
        return await self._provider.recognize(payload)

    @property
    def provider(self) -> RecognitionProvider:
        return self._provider
