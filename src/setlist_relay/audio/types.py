from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(slots=True)
class AudioPayload:
    """Raw audio payload supplied by clients."""

    data: bytes
    content_type: str = DEFAULT_CONTENT_TYPE
    filename: Optional[str] = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)
