from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Protocol

from .errors import FileTooLarge, InvalidFileType, NoFileProvided
from .types import RecognitionRequest

ALLOWED_CONTENT_TYPES = frozenset(
    {"audio/mpeg", "audio/wav", "audio/mp3", "audio/m4a", "audio/ogg"}
)
ALLOWED_EXTENSION_RE = re.compile(r"\.(mp3|wav|m4a|ogg)$", re.IGNORECASE)

_MIB = 1024 * 1024


class UploadLike(Protocol):
    filename: Optional[str]
    content_type: Optional[str]

    async def read(self, size: int = -1) -> bytes: ...


@dataclass(slots=True)
class IntakeLimits:
    max_bytes: int = 10 * _MIB
    allowed_content_types: frozenset[str] = field(default=ALLOWED_CONTENT_TYPES)

    @property
    def max_size_label(self) -> str:
        if self.max_bytes < _MIB:
            return f"{self.max_bytes} bytes"
        if self.max_bytes % _MIB == 0:
            return f"{self.max_bytes // _MIB}MB"
        return f"{self.max_bytes / _MIB:.1f}MB"


class UploadIntake:
    """Turns an uploaded file into a RecognitionRequest or rejects it.

    Checks run in a fixed order: presence, size, then type. The payload is
    only ever held in memory.
    """

    def __init__(self, *, limits: IntakeLimits) -> None:
        self._limits = limits

    @property
    def limits(self) -> IntakeLimits:
        return self._limits

    def accept(
        self,
        *,
        data: bytes | None,
        filename: str | None,
        content_type: str | None,
    ) -> RecognitionRequest:
        if data is None or not filename:
            raise NoFileProvided()
        self._enforce_size(len(data))
        mime = (content_type or "").strip().lower()
        self._enforce_type(mime, filename)
        return RecognitionRequest(
            data=data,
            content_type=mime,
            filename=filename,
            size_bytes=len(data),
        )

    async def from_upload(self, upload: UploadLike | None) -> RecognitionRequest:
        if upload is None or not upload.filename:
            raise NoFileProvided()
        # one byte past the limit is enough to know it is too large
        data = await upload.read(self._limits.max_bytes + 1)
        return self.accept(data=data, filename=upload.filename, content_type=upload.content_type)

    def is_allowed_type(self, content_type: str | None, filename: str | None) -> bool:
        mime = (content_type or "").strip().lower()
        if mime in self._limits.allowed_content_types:
            return True
        return bool(filename and ALLOWED_EXTENSION_RE.search(filename))

    def _enforce_size(self, size: int) -> None:
        if size > self._limits.max_bytes:
            raise FileTooLarge(f"File too large. Maximum size is {self._limits.max_size_label}.")

    def _enforce_type(self, content_type: str, filename: str) -> None:
        if not self.is_allowed_type(content_type, filename):
            raise InvalidFileType()
