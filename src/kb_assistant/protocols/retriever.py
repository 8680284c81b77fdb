"""Protocol for knowledge-base retrieval."""

from __future__ import annotations

from typing import Protocol

from kb_assistant.models.domain import RetrievalResult


class Retriever(Protocol):
    async def search(self, query: str) -> list[RetrievalResult]:
        """Results ordered by descending score; may be empty."""
        ...

    async def stats(self) -> dict: ...
