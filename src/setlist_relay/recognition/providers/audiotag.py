"""AudioTag.info recognition provider."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ...audio import AudioPayload
from ..normalizer import normalize_response
from ..types import RecognitionOutcome, UpstreamError
from .base import ProviderNotConfiguredError, RecognitionProvider

logger = logging.getLogger(__name__)

UPLOAD_FILENAME = "audio.wav"
TIMEOUT_STATUS_CODE = 504


class AudioTagProvider(RecognitionProvider):
    """Relays audio to the AudioTag.info API and normalizes its answer."""

    name = "audiotag"

    def __init__(
        self,
        *,
        api_url: str,
        api_token: Optional[str],
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_token:
            raise ProviderNotConfiguredError("AUDIOTAG_API_TOKEN is required for the audiotag provider")
        self._api_url = api_url
        self._api_token = api_token
        self._timeout = timeout
        self._transport = transport

    async def recognize(self, payload: AudioPayload) -> RecognitionOutcome:
        files = {"file": (UPLOAD_FILENAME, payload.data, payload.content_type)}
        data = {"api_token": self._api_token}

        logger.info("audiotag.request", extra={"url": self._api_url, "size_bytes": payload.size_bytes})
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport, follow_redirects=True
            ) as client:
                response = await client.post(self._api_url, data=data, files=files)
        except httpx.TimeoutException:
            logger.warning("audiotag.timeout", extra={"timeout": self._timeout})
            return UpstreamError(
                provider=self.name,
                status_code=TIMEOUT_STATUS_CODE,
                detail=f"{self.name} request timed out after {self._timeout:g}s",
            )

        logger.info("audiotag.response", extra={"status": response.status_code})
        if not response.is_success:
            logger.error(
                "audiotag.upstream_error",
                extra={"status": response.status_code, "body": response.text},
            )
            return UpstreamError(provider=self.name, status_code=response.status_code, detail=response.text)

        body = response.json()
        logger.debug("audiotag.body", extra={"body": body})
        return normalize_response(body, provider=self.name)
