from __future__ import annotations

"""ACRCloud identify API (v1) client."""

import base64
import hashlib
import hmac
import logging
import time
from typing import Any, Callable, Dict, Optional

import httpx

from .base import ProviderTransportError, RecognitionProvider

logger = logging.getLogger(__name__)

IDENTIFY_PATH = "/v1/identify"
DATA_TYPE = "audio"
SIGNATURE_VERSION = "1"


def build_signature(
    *,
    access_key: str,
    access_secret: str,
    timestamp: str,
    http_method: str = "POST",
    http_uri: str = IDENTIFY_PATH,
    data_type: str = DATA_TYPE,
    signature_version: str = SIGNATURE_VERSION,
) -> str:
    """Base64 HMAC-SHA1 over the newline-joined request description."""

    string_to_sign = "\n".join(
        [http_method, http_uri, access_key, data_type, signature_version, timestamp]
    )
    digest = hmac.new(
        access_secret.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        digestmod=hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


class AcrCloudProvider(RecognitionProvider):
    """Signed multipart upload to ``https://<host>/v1/identify``."""

    name = "acrcloud"

    def __init__(
        self,
        *,
        host: str,
        access_key: str,
        access_secret: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not host:
            raise ValueError("ACRCloud host is required")
        if not access_key or not access_secret:
            raise ValueError("ACRCloud access key and secret are required")

        self._host = host.strip().rstrip("/")
        self._access_key = access_key
        self._access_secret = access_secret
        self._timeout = timeout
        self._client = client
        self._clock = clock

    @property
    def host(self) -> str:
        return self._host

    @property
    def url(self) -> str:
        if self._host.startswith(("http://", "https://")):
            return f"{self._host}{IDENTIFY_PATH}"
        return f"https://{self._host}{IDENTIFY_PATH}"

    def _form_fields(self, sample_bytes: int) -> Dict[str, str]:
        timestamp = str(int(self._clock()))
        signature = build_signature(
            access_key=self._access_key,
            access_secret=self._access_secret,
            timestamp=timestamp,
        )
        return {
            "access_key": self._access_key,
            "data_type": DATA_TYPE,
            "signature_version": SIGNATURE_VERSION,
            "signature": signature,
            "sample_bytes": str(sample_bytes),
            "timestamp": timestamp,
        }

    async def recognize(self, audio: bytes) -> Dict[str, Any]:
        data = self._form_fields(len(audio))
        files = {"sample": ("sample", audio, "application/octet-stream")}

        try:
            if self._client is not None:
                resp = await self._client.post(self.url, data=data, files=files, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(self.url, data=data, files=files)
        except httpx.TimeoutException as exc:
            raise ProviderTransportError(f"ACRCloud request timeout after {self._timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise ProviderTransportError(f"ACRCloud request failed: {exc}") from exc

        if resp.status_code in (401, 403):
            raise ProviderTransportError(
                f"ACRCloud rejected the credentials ({resp.status_code} unauthorized)",
                status_code=resp.status_code,
            )
        if resp.status_code >= 400:
            raise ProviderTransportError(
                f"ACRCloud returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise ProviderTransportError("ACRCloud returned a non-JSON response") from exc

        if not isinstance(body, dict):
            raise ProviderTransportError("ACRCloud returned an unexpected response body")

        logger.debug("acrcloud.identify.response", extra={"status": body.get("status")})
        return body
