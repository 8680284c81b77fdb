"""Protocol for response strategies."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from kb_assistant.models.domain import RetrievalResult
from kb_assistant.models.events import StreamEvent


class ResponseStrategy(Protocol):
    name: str

    def generate_response(
        self, query: str, results: list[RetrievalResult]
    ) -> AsyncIterator[StreamEvent]: ...
