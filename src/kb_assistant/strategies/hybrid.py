"""Blend knowledge-base context with general model knowledge by confidence band."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import aclosing
from enum import Enum

from kb_assistant.generation.context_builder import build_context
from kb_assistant.generation.driver import GenerationDriver
from kb_assistant.generation.prompt_templates import (
    AUGMENTED_PROMPT,
    GENERAL_PROMPT_WITH_CONTEXT,
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
from kb_assistant.models.events import StreamEvent
from kb_assistant.observability.logger import get_logger

logger = get_logger("hybrid")


class HybridBand(str, Enum):
    KB_ONLY = "kb_only"
    AUGMENTED = "augmented"
    GENERAL = "general"


def classify_band(top: float, thresholds: ConfidenceThresholds) -> HybridBand:
    # ties go to the higher-confidence band
    if top >= thresholds.confidence_threshold_high:
        return HybridBand.KB_ONLY
    if top >= thresholds.confidence_threshold_low:
        return HybridBand.AUGMENTED
    return HybridBand.GENERAL


class HybridStrategy:
    name = "hybrid"
    max_context_chunks = 6

    def __init__(self, driver: GenerationDriver, thresholds: ConfidenceThresholds) -> None:
        self._driver = driver
        self._thresholds = thresholds

    def build_request(self, query: str, results: list[RetrievalResult]) -> GenerationRequest:
        top = top_score(results) or 0.0
        band = classify_band(top, self._thresholds)
        logger.debug(
            "hybrid_band",
            band=band.value,
            top_score=round(top, 3),
            high=self._thresholds.confidence_threshold_high,
            low=self._thresholds.confidence_threshold_low,
        )

        context = build_context(results, self.max_context_chunks)
        if band is HybridBand.KB_ONLY:
            template, source = STRICT_PROMPT, CitationSource.INTERNAL_DOCS
        elif band is HybridBand.AUGMENTED:
            template, source = AUGMENTED_PROMPT, CitationSource.HYBRID
        else:
            template, source = GENERAL_PROMPT_WITH_CONTEXT, CitationSource.GENERAL_LLM

        return GenerationRequest(
            prompt=render_prompt(template, context, query),
            citation_source=source,
            confidence=top,
        )

    async def generate_response(
        self, query: str, results: list[RetrievalResult]
    ) -> AsyncIterator[StreamEvent]:
        request = self.build_request(query, results)
        async with aclosing(self._driver.stream(request)) as events:
            async for event in events:
                yield event
