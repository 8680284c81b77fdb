"""Protocol for streaming LLM providers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol


class StreamingLLM(Protocol):
    def stream(
        self,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> AsyncIterator[str]: ...
