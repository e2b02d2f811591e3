from __future__ import annotations

import abc
from typing import Any, Dict


class ProviderTransportError(RuntimeError):
    """Raised when the provider could not be reached or refused the call."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RecognitionProvider(abc.ABC):
    """Interface for audio recognition vendors."""

    name: str

    @abc.abstractmethod
    async def recognize(self, audio: bytes) -> Dict[str, Any]:
        """Send the clip to the vendor and return its raw JSON body."""
        raise NotImplementedError
