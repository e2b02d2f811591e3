from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from ..settings import AcrCloudSettings
from .providers.acrcloud import AcrCloudProvider
from .providers.base import RecognitionProvider
from .schema import MATCH_CODE, NO_MATCH_CODE, VendorResponse
from .types import (
    DiagnosticsReport,
    Matched,
    NoMatch,
    ProviderError,
    ProviderErrorKind,
    RecognitionOutcome,
)

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "ACRCloud service not available. Please check configuration."
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
DIAGNOSTIC_SAMPLE_BYTES = 1024


class GatewayState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


def normalize_response(raw: Dict[str, Any]) -> RecognitionOutcome:
    """Collapse a raw vendor body into Matched / NoMatch / ProviderError."""

    try:
        response = VendorResponse.model_validate(raw)
    except ValidationError as exc:
        logger.warning("gateway.response.invalid", extra={"error": str(exc)})
        return ProviderError(
            message=f"Malformed response from ACRCloud: {exc.error_count()} validation error(s)",
            kind=ProviderErrorKind.MALFORMED,
            vendor_code=_raw_code(raw),
        )

    code = response.code
    if code == MATCH_CODE:
        try:
            music = response.first_music()
        except ValidationError as exc:
            logger.warning("gateway.response.invalid_music", extra={"error": str(exc)})
            return ProviderError(
                message=f"Malformed response from ACRCloud: {exc.error_count()} validation error(s) in music[0]",
                kind=ProviderErrorKind.MALFORMED,
                vendor_code=code,
            )
        if music is None:
            return ProviderError(
                message="Malformed response from ACRCloud: no music entries",
                kind=ProviderErrorKind.MALFORMED,
                vendor_code=code,
            )
        return Matched(
            title=music.title,
            artist=music.artists[0].name,
            album=music.album.name if music.album is not None else None,
            duration_ms=music.duration_ms,
            release_date=music.release_date,
            genres=list(music.genres),
            external_ids=dict(music.external_ids),
            score=music.score,
        )
    if code == NO_MATCH_CODE:
        return NoMatch()

    message = UNKNOWN_ERROR_MESSAGE
    if response.status is not None and response.status.msg:
        message = response.status.msg
    return ProviderError(message=message, kind=ProviderErrorKind.VENDOR, vendor_code=code)


def _raw_code(raw: Any) -> Optional[int]:
    status = raw.get("status") if isinstance(raw, dict) else None
    code = status.get("code") if isinstance(status, dict) else None
    return code if isinstance(code, int) else None


class RecognitionGateway:
    """Owns the provider handle and turns provider calls into outcomes.

    A gateway built without a provider is permanently uninitialized: every
    call fails fast without touching the network.
    """

    def __init__(
        self,
        *,
        provider: Optional[RecognitionProvider] = None,
        timeout_seconds: float = 10.0,
        host: Optional[str] = None,
        configured: Optional[bool] = None,
    ) -> None:
        self._provider = provider
        self._timeout = timeout_seconds
        self._host = host
        self._configured = provider is not None if configured is None else configured

    @classmethod
    def from_settings(cls, cfg: AcrCloudSettings) -> "RecognitionGateway":
        if not cfg.has_credentials:
            logger.warning(
                "ACRCloud credentials not found. Please set ACR_ACCESS_KEY and ACR_ACCESS_SECRET in .env file"
            )
            return cls(provider=None, timeout_seconds=cfg.timeout_seconds, host=cfg.host, configured=False)

        try:
            provider = AcrCloudProvider(
                host=cfg.host,
                access_key=cfg.access_key or "",
                access_secret=cfg.access_secret or "",
                timeout=cfg.timeout_seconds,
            )
        except Exception:
            logger.exception("gateway.provider_init_failed")
            return cls(provider=None, timeout_seconds=cfg.timeout_seconds, host=cfg.host, configured=True)

        logger.info("ACRCloud client initialized successfully", extra={"host": cfg.host})
        return cls(provider=provider, timeout_seconds=cfg.timeout_seconds, host=cfg.host, configured=True)

    @property
    def provider(self) -> Optional[RecognitionProvider]:
        return self._provider

    @property
    def state(self) -> GatewayState:
        return GatewayState.READY if self._provider is not None else GatewayState.UNINITIALIZED

    @property
    def is_ready(self) -> bool:
        return self.state is GatewayState.READY

    @property
    def configured(self) -> bool:
        return self._configured

    @property
    def host(self) -> Optional[str]:
        return self._host

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    async def identify(self, audio: bytes) -> RecognitionOutcome:
        outcome, _ = await self._recognize(audio)
        return outcome

    async def test_provider(self) -> DiagnosticsReport:
        outcome, raw = await self._recognize(bytes(DIAGNOSTIC_SAMPLE_BYTES))
        return DiagnosticsReport(
            outcome=outcome,
            configured=self._configured,
            has_credentials=self._configured,
            host=self._host,
            raw_response=raw,
        )

    async def _recognize(self, audio: bytes) -> Tuple[RecognitionOutcome, Optional[Dict[str, Any]]]:
        if self._provider is None:
            return ProviderError(message=UNAVAILABLE_MESSAGE, kind=ProviderErrorKind.UNAVAILABLE), None

        try:
            async with asyncio.timeout(self._timeout):
                raw = await self._provider.recognize(audio)
        except TimeoutError:
            logger.error("gateway.timeout", extra={"timeout_seconds": self._timeout})
            message = f"ACRCloud request timeout after {int(self._timeout * 1000)}ms"
            return ProviderError(message=message, kind=ProviderErrorKind.TRANSPORT), None
        except Exception as exc:
            logger.exception("gateway.provider_failed")
            return ProviderError(message=str(exc) or "Internal server error", kind=ProviderErrorKind.TRANSPORT), None

        outcome = normalize_response(raw)
        logger.info(
            "gateway.identify.outcome",
            extra={"variant": outcome.variant, "vendor_code": _raw_code(raw)},
        )
        return outcome, raw
