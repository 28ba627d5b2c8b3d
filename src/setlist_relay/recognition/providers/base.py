from __future__ import annotations

import abc

from ...audio import AudioPayload
from ..types import RecognitionOutcome


class ProviderNotConfiguredError(RuntimeError):
    """Raised when a provider is selected without the configuration it needs."""


class RecognitionProvider(abc.ABC):
    """Interface for track recognition providers."""

    name: str

    @abc.abstractmethod
    async def recognize(self, payload: AudioPayload) -> RecognitionOutcome:
        """Identify the track in ``payload``."""
        raise NotImplementedError
