"""Recognition gateway for clipfinder."""

from .service import GatewayState, RecognitionGateway, normalize_response
from .types import (
    DiagnosticsReport,
    Matched,
    NoMatch,
    ProviderError,
    ProviderErrorKind,
    RecognitionOutcome,
)

__all__ = [
    "RecognitionGateway",
    "GatewayState",
    "normalize_response",
    "RecognitionOutcome",
    "Matched",
    "NoMatch",
    "ProviderError",
    "ProviderErrorKind",
    "DiagnosticsReport",
]
