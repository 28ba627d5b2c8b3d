"""Track recognition: provider relay and response normalization."""

from .normalizer import extract_track, normalize_response
from .service import RecognitionService
from .types import Matched, NoMatch, RecognitionOutcome, TrackMatch, UpstreamError

__all__ = [
    "RecognitionService",
    "RecognitionOutcome",
    "Matched",
    "NoMatch",
    "UpstreamError",
    "TrackMatch",
    "extract_track",
    "normalize_response",
]
