"""Recognition provider implementations."""

from .acrcloud import AcrCloudProvider
from .base import ProviderTransportError, RecognitionProvider
from .mock import MockRecognitionProvider

__all__ = [
    "RecognitionProvider",
    "ProviderTransportError",
    "AcrCloudProvider",
    "MockRecognitionProvider",
]
