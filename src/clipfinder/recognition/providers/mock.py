from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from .base import RecognitionProvider

NO_MATCH_RESPONSE: Dict[str, Any] = {
    "status": {"code": 1001, "msg": "No result", "version": "1.0"},
}


class MockRecognitionProvider(RecognitionProvider):
    name = "mock"

    def __init__(
        self,
        response: Optional[Dict[str, Any]] = None,
        *,
        error: Optional[BaseException] = None,
    ) -> None:
        self.response = response if response is not None else NO_MATCH_RESPONSE
        self.error = error
        self.calls: list[bytes] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def recognize(self, audio: bytes) -> Dict[str, Any]:
        self.calls.append(audio)
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.response)
