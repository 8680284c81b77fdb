"""Turns a provider token stream into the typed event sequence."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import aclosing

from kb_assistant.models.domain import GenerationRequest
from kb_assistant.models.events import (
    CitationEvent,
    EndEvent,
    ErrorEvent,
    StreamEvent,
    TokenEvent,
)
from kb_assistant.observability.logger import get_logger
from kb_assistant.protocols.llm import StreamingLLM

logger = get_logger("generation")

DEFAULT_STREAM_ERROR = "An error occurred during streaming"


class GenerationDriver:
    def __init__(self, llm: StreamingLLM, temperature: float, max_tokens: int) -> None:
        self._llm = llm
        self._temperature = temperature
        self._max_tokens = max_tokens

    def effective_temperature(self, request: GenerationRequest) -> float:
        if request.temperature_override is not None:
            return request.temperature_override
        return self._temperature

    async def stream(self, request: GenerationRequest) -> AsyncIterator[StreamEvent]:
        """Yield ``token*`` then ``citation, end``; or ``token*`` then a single ``error``.

        Failures are reported once and never retried. Closing this iterator
        early closes the provider stream as well.
        """
        temperature = self.effective_temperature(request)
        logger.debug(
            "stream_started",
            source=request.citation_source.value,
            temperature=temperature,
            prompt_len=len(request.prompt),
        )
        tokens = 0
        try:
            async with aclosing(
                self._llm.stream(request.prompt, temperature, self._max_tokens)
            ) as fragments:
                async for fragment in fragments:
                    if fragment:
                        tokens += 1
                        yield TokenEvent(fragment)
        except Exception as e:
            logger.error("stream_failed", error=str(e), tokens=tokens)
            yield ErrorEvent(str(e) or DEFAULT_STREAM_ERROR)
            return

        yield CitationEvent(source=request.citation_source, confidence=request.confidence)
        yield EndEvent()
        logger.debug("stream_completed", tokens=tokens)
