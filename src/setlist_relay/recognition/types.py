from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Union

NO_TRACK_RECOGNIZED = "No track recognized"


@dataclass(frozen=True, slots=True)
class TrackMatch:
    title: str
    artist: str
    confidence: float
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Matched:
    track: TrackMatch
    provider: str


@dataclass(frozen=True, slots=True)
class NoMatch:
    provider: str
    reason: str = NO_TRACK_RECOGNIZED


@dataclass(frozen=True, slots=True)
class UpstreamError:
    provider: str
    status_code: int
    detail: str


RecognitionOutcome = Union[Matched, NoMatch, UpstreamError]
