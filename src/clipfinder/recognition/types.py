from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union


class ProviderErrorKind(str, enum.Enum):
    VENDOR = "vendor"
    TRANSPORT = "transport"
    UNAVAILABLE = "unavailable"
    MALFORMED = "malformed"


@dataclass(slots=True, frozen=True)
class Matched:
    title: str
    artist: str
    album: Optional[str] = None
    duration_ms: Optional[int] = None
    release_date: Optional[str] = None
    genres: List[str] = field(default_factory=list)
    external_ids: Mapping[str, Any] = field(default_factory=dict)
    score: Optional[float] = None

    variant = "matched"


@dataclass(slots=True, frozen=True)
class NoMatch:
    variant = "no_match"


@dataclass(slots=True, frozen=True)
class ProviderError:
    message: str
    kind: ProviderErrorKind = ProviderErrorKind.TRANSPORT
    vendor_code: Optional[int] = None

    variant = "provider_error"

    @property
    def is_vendor_reported(self) -> bool:
        return self.kind is ProviderErrorKind.VENDOR


RecognitionOutcome = Union[Matched, NoMatch, ProviderError]


@dataclass(slots=True)
class DiagnosticsReport:
    """Result of a connectivity self-test against the provider."""

    outcome: RecognitionOutcome
    configured: bool
    has_credentials: bool
    host: Optional[str] = None
    raw_response: Optional[Dict[str, Any]] = None
