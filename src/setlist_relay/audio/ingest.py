from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from .types import DEFAULT_CONTENT_TYPE, AudioPayload


class AudioTooLargeError(ValueError):
    """Raised when an upload exceeds the configured size ceiling."""

    def __init__(self, size: int, max_bytes: int) -> None:
        super().__init__(f"Audio file exceeds the upload limit of {max_bytes} bytes")
        self.size = size
        self.max_bytes = max_bytes


class EmptyAudioError(ValueError):
    """Raised when an upload carries no audio bytes."""


@dataclass(slots=True)
class IngestLimits:
    max_bytes: int


class AudioIngestor:
    """Turns uploaded audio into AudioPayload objects."""

    def __init__(self, *, limits: IngestLimits) -> None:
        self._limits = limits

    @property
    def limits(self) -> IngestLimits:
        return self._limits

    async def from_bytes(
        self,
        *,
        data: bytes,
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> AudioPayload:
        if not data:
            raise EmptyAudioError("audio payload is empty")
        self.enforce_size(len(data))
        return AudioPayload(
            data=data,
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            filename=filename,
        )

    async def from_upload(
        self,
        *,
        file_reader: Callable[[int], Awaitable[bytes]],
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
        size_hint: Optional[int] = None,
    ) -> AudioPayload:
        if size_hint is not None:
            self.enforce_size(size_hint)
        # Never read more than one byte past the ceiling.
        data = await file_reader(self._limits.max_bytes + 1)
        return await self.from_bytes(data=data, content_type=content_type, filename=filename)

    def enforce_size(self, size: int) -> None:
        if size > self._limits.max_bytes:
            raise AudioTooLargeError(size, self._limits.max_bytes)
