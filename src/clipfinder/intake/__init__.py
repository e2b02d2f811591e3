"""Upload validation for inbound audio clips."""

from .errors import FileTooLarge, IntakeError, InvalidFileType, NoFileProvided
from .ingest import IntakeLimits, UploadIntake
from .types import RecognitionRequest

__all__ = [
    "UploadIntake",
    "IntakeLimits",
    "RecognitionRequest",
    "IntakeError",
    "NoFileProvided",
    "InvalidFileType",
    "FileTooLarge",
]
