from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RecognitionRequest:
    """Validated audio clip held in memory for a single recognition call."""

    data: bytes
    content_type: str
    filename: str
    size_bytes: int
