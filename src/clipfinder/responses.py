from __future__ import annotations

"""Maps recognition outcomes and intake rejections onto the public JSON contract."""

from typing import Any, Dict, Tuple

from .intake import IntakeError
from .recognition.types import Matched, NoMatch, ProviderError, RecognitionOutcome

NO_MATCH_MESSAGE = "No music identified in the audio clip"

MappedResponse = Tuple[int, Dict[str, Any]]


def error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


def map_outcome(outcome: RecognitionOutcome) -> MappedResponse:
    if isinstance(outcome, Matched):
        return 200, {
            "success": True,
            "identified": True,
            "data": {
                "title": outcome.title,
                "artist": outcome.artist,
                "album": outcome.album,
                "duration": outcome.duration_ms,
                "release_date": outcome.release_date,
                "genres": list(outcome.genres),
                "external_ids": dict(outcome.external_ids),
                "score": outcome.score,
            },
        }
    if isinstance(outcome, NoMatch):
        return 200, {"success": True, "identified": False, "message": NO_MATCH_MESSAGE}
    if isinstance(outcome, ProviderError):
        status = 400 if outcome.is_vendor_reported else 500
        return status, error_body(outcome.message)
    raise TypeError(f"unsupported outcome: {outcome!r}")


def map_intake_error(error: IntakeError) -> MappedResponse:
    return 400, error_body(error.message)


__all__ = ["map_outcome", "map_intake_error", "error_body", "NO_MATCH_MESSAGE", "MappedResponse"]
