from __future__ import annotations

from ...audio import AudioPayload
from ..types import Matched, NoMatch, RecognitionOutcome, TrackMatch
from .base import RecognitionProvider


class MockRecognitionProvider(RecognitionProvider):
    name = "mock"

    def __init__(self, *, match: bool = True) -> None:
        self._match = match

    async def recognize(self, payload: AudioPayload) -> RecognitionOutcome:
        if not self._match:
            return NoMatch(provider=self.name)
        track = TrackMatch(title="Mock Track", artist="Mock Artist", confidence=1.0, source=self.name)
        return Matched(track=track, provider=self.name)
