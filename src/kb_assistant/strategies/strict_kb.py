"""Knowledge-base-only answers with a deterministic refusal below threshold."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import aclosing

from kb_assistant.generation.context_builder import build_context
from kb_assistant.generation.driver import GenerationDriver
from kb_assistant.generation.prompt_templates import (
    NO_ANSWER_PHRASE,
    STRICT_PROMPT,
    render_prompt,
)
from kb_assistant.models.domain import (
    CitationSource,
    ConfidenceThresholds,
    GenerationRequest,
    RetrievalResult,
    top_score,
)
from kb_assistant.models.events import CitationEvent, EndEvent, StreamEvent, TokenEvent
from kb_assistant.observability.logger import get_logger

logger = get_logger("strict_kb")

NO_CONTEXT_NOTES = "no relevant context found"


class StrictKBStrategy:
    name = "strict"
    max_context_chunks = 5

    def __init__(self, driver: GenerationDriver, thresholds: ConfidenceThresholds) -> None:
        self._driver = driver
        self._threshold = thresholds.strict_kb_confidence_threshold

    async def generate_response(
        self, query: str, results: list[RetrievalResult]
    ) -> AsyncIterator[StreamEvent]:
        top = top_score(results) or 0.0
        logger.debug("strict_kb_selected", results=len(results), top_score=round(top, 3))

        if not results or top < self._threshold:
            logger.debug("strict_kb_refusal", threshold=self._threshold)
            for event in self.no_answer_events():
                yield event
            return

        context = build_context(results, self.max_context_chunks)
        request = GenerationRequest(
            prompt=render_prompt(STRICT_PROMPT, context, query),
            citation_source=CitationSource.INTERNAL_DOCS,
            confidence=top,
            temperature_override=0.0,
        )
        async with aclosing(self._driver.stream(request)) as events:
            async for event in events:
                yield event

    @staticmethod
    def no_answer_events() -> list[StreamEvent]:
        return [
            TokenEvent(NO_ANSWER_PHRASE),
            CitationEvent(
                source=CitationSource.INTERNAL_DOCS,
                confidence=0,
                notes=NO_CONTEXT_NOTES,
            ),
            EndEvent(),
        ]
