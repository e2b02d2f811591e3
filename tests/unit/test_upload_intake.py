import pytest

from clipfinder.intake import (
    FileTooLarge,
    IntakeLimits,
    InvalidFileType,
    NoFileProvided,
    UploadIntake,
)


class DummyUpload:
    def __init__(self, data: bytes, filename: str | None, content_type: str | None) -> None:
        self._data = data
        self.filename = filename
        self.content_type = content_type
        self.requested: list[int] = []

    async def read(self, size: int = -1) -> bytes:
        self.requested.append(size)
        return self._data if size < 0 else self._data[:size]


def _intake(max_bytes: int = 10 * 1024 * 1024) -> UploadIntake:
    return UploadIntake(limits=IntakeLimits(max_bytes=max_bytes))


def test_accepts_allowed_mime_type():
    request = _intake().accept(data=b"12345", filename="clip.bin", content_type="audio/mpeg")

    assert request.data == b"12345"
    assert request.size_bytes == 5
    assert request.content_type == "audio/mpeg"
    assert request.filename == "clip.bin"


@pytest.mark.parametrize("filename", ["song.MP3", "take.wav", "voice.m4a", "loop.Ogg"])
def test_accepts_allowed_extension_with_unknown_mime(filename):
    request = _intake().accept(data=b"x", filename=filename, content_type="application/octet-stream")

    assert request.filename == filename


def test_rejects_when_mime_and_extension_both_outside_allow_list():
    with pytest.raises(InvalidFileType) as excinfo:
        _intake().accept(data=b"hello", filename="clip.txt", content_type="text/plain")

    assert excinfo.value.message == "Invalid file type. Please upload an audio file."


def test_extension_must_be_a_suffix():
    with pytest.raises(InvalidFileType):
        _intake().accept(data=b"x", filename="clip.mp3.txt", content_type="text/plain")


def test_rejects_missing_file():
    with pytest.raises(NoFileProvided) as excinfo:
        _intake().accept(data=None, filename=None, content_type=None)

    assert excinfo.value.message == "No audio file provided"


def test_size_is_checked_before_type():
    with pytest.raises(FileTooLarge) as excinfo:
        _intake(max_bytes=3).accept(data=b"1234", filename="notes.txt", content_type="text/plain")

    assert excinfo.value.message == "File too large. Maximum size is 3 bytes."


def test_default_limit_message():
    too_big = bytes(10 * 1024 * 1024 + 1)

    with pytest.raises(FileTooLarge) as excinfo:
        _intake().accept(data=too_big, filename="clip.mp3", content_type="audio/mpeg")

    assert excinfo.value.message == "File too large. Maximum size is 10MB."


@pytest.mark.parametrize(
    "max_bytes, label",
    [
        (1000, "1000 bytes"),
        (512 * 1024, "524288 bytes"),
        (1024 * 1024, "1MB"),
        (3 * 1024 * 1024 // 2, "1.5MB"),
    ],
)
def test_limit_message_never_rounds_to_zero(max_bytes, label):
    with pytest.raises(FileTooLarge) as excinfo:
        _intake(max_bytes=max_bytes).accept(data=bytes(max_bytes + 1), filename="clip.mp3", content_type="audio/mpeg")

    assert excinfo.value.message == f"File too large. Maximum size is {label}."


def test_limit_is_inclusive():
    data = bytes(1024)

    request = _intake(max_bytes=1024).accept(data=data, filename="clip.wav", content_type="audio/wav")

    assert request.size_bytes == 1024


@pytest.mark.asyncio
async def test_from_upload_reads_at_most_one_byte_past_limit():
    upload = DummyUpload(bytes(64), filename="clip.mp3", content_type="audio/mpeg")

    with pytest.raises(FileTooLarge):
        await _intake(max_bytes=16).from_upload(upload)

    assert upload.requested == [17]


@pytest.mark.asyncio
async def test_from_upload_without_filename_is_missing_file():
    upload = DummyUpload(b"abc", filename="", content_type="audio/mpeg")

    with pytest.raises(NoFileProvided):
        await _intake().from_upload(upload)

    assert upload.requested == []


@pytest.mark.asyncio
async def test_from_upload_none_is_missing_file():
    with pytest.raises(NoFileProvided):
        await _intake().from_upload(None)
