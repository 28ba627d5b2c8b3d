"""Audio upload ingestion."""

from .ingest import AudioIngestor, AudioTooLargeError, EmptyAudioError, IngestLimits
from .types import AudioPayload

__all__ = [
    "AudioIngestor",
    "AudioTooLargeError",
    "EmptyAudioError",
    "IngestLimits",
    "AudioPayload",
]
