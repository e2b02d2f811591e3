from __future__ import annotations


class IntakeError(ValueError):
    """Raised when an uploaded clip is rejected before recognition."""

    default_message = "Invalid upload"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class NoFileProvided(IntakeError):
    default_message = "No audio file provided"


class FileTooLarge(IntakeError):
    default_message = "File too large. Maximum size is 10MB."


class InvalidFileType(IntakeError):
    default_message = "Invalid file type. Please upload an audio file."
