"""Query entry point: retrieve, pick a strategy, forward its events."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import aclosing

from kb_assistant.models.domain import RetrievalResult
from kb_assistant.models.events import (
    AggregatedResponse,
    ErrorEvent,
    StreamEvent,
    aggregate,
)
from kb_assistant.models.schemas import ChatQuery
from kb_assistant.observability.logger import get_logger
from kb_assistant.protocols.retriever import Retriever
from kb_assistant.strategies.selector import StrategySelector

logger = get_logger("chat_orchestrator")

QUERY_FAILED_MESSAGE = "An error occurred while processing your query. Please try again."


class ChatOrchestrator:
    def __init__(self, retriever: Retriever, selector: StrategySelector) -> None:
        self._retriever = retriever
        self._selector = selector

    async def handle_query(
        self, query: str, use_general_llm: bool
    ) -> AsyncIterator[StreamEvent]:
        logger.info(
            "query_received",
            query=query[:50],
            mode="hybrid" if use_general_llm else "strict",
        )

        start = time.monotonic()
        try:
            results: list[RetrievalResult] = await self._retriever.search(query)
        except Exception as e:
            logger.error("retrieval_failed", error=str(e), error_type=type(e).__name__)
            yield ErrorEvent(QUERY_FAILED_MESSAGE)
            return

        logger.debug(
            "retrieval_completed",
            results=len(results),
            top_score=results[0].score if results else None,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )

        strategy = self._selector.select(use_general_llm)
        try:
            async with aclosing(strategy.generate_response(query, results)) as events:
                async for event in events:
                    yield event
        except Exception as e:
            logger.error(
                "strategy_failed",
                strategy=strategy.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            yield ErrorEvent(QUERY_FAILED_MESSAGE)

    def handle(self, chat_query: ChatQuery) -> AsyncIterator[StreamEvent]:
        return self.handle_query(chat_query.query, chat_query.use_general_llm)

    async def handle_aggregated(self, chat_query: ChatQuery) -> AggregatedResponse:
        return await aggregate(self.handle(chat_query))

    async def stats(self) -> dict:
        return await self._retriever.stats()
