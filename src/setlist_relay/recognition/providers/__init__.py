"""Recognition provider implementations."""

from .audiotag import AudioTagProvider
from .base import ProviderNotConfiguredError, RecognitionProvider
from .mock import MockRecognitionProvider

__all__ = [
    "AudioTagProvider",
    "MockRecognitionProvider",
    "ProviderNotConfiguredError",
    "RecognitionProvider",
]
