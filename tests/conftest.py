"""Shared test fixtures."""

from __future__ import annotations

import pytest

from kb_assistant.config.settings import Settings
from kb_assistant.exceptions import GenerationError, RetrievalError
from kb_assistant.generation.driver import GenerationDriver
from kb_assistant.models.domain import ConfidenceThresholds, RetrievalResult
from kb_assistant.pipeline.chat_orchestrator import ChatOrchestrator
from kb_assistant.strategies.hybrid import HybridStrategy
from kb_assistant.strategies.selector import StrategySelector
from kb_assistant.strategies.strict_kb import StrictKBStrategy


class FakeLLM:
    """Streaming LLM double that records every call."""

    def __init__(self, tokens: list[str] | None = None, fail_after: int | None = None) -> None:
        self.tokens = tokens if tokens is not None else ["Hello", " ", "world"]
        self.fail_after = fail_after
        self.calls: list[dict] = []
        self.closed = False

    async def stream(self, prompt: str, temperature: float, max_tokens: int):
        self.calls.append(
            {"prompt": prompt, "temperature": temperature, "max_tokens": max_tokens}
        )
        try:
            for i, token in enumerate(self.tokens):
                if self.fail_after is not None and i == self.fail_after:
                    raise GenerationError("provider exploded")
                yield token
            if self.fail_after is not None and self.fail_after >= len(self.tokens):
                raise GenerationError("provider exploded")
        finally:
            self.closed = True


class FakeRetriever:
    def __init__(self, results: list[RetrievalResult] | None = None, error: Exception | None = None) -> None:
        self.results = results or []
        self.error = error
        self.queries: list[str] = []

    async def search(self, query: str) -> list[RetrievalResult]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.results)

    async def stats(self) -> dict:
        return {"total_chunks": len(self.results)}


def make_results(*scores: float | None) -> list[RetrievalResult]:
    return [
        RetrievalResult(content=f"passage {i}", score=s, chunk_id=f"c{i}")
        for i, s in enumerate(scores, 1)
    ]


@pytest.fixture
def settings():
    return Settings(google_api_key="test-key", openai_api_key="test-key", _env_file=None)


@pytest.fixture
def thresholds():
    return ConfidenceThresholds(
        strict_kb_confidence_threshold=0.45,
        confidence_threshold_high=0.7,
        confidence_threshold_low=0.4,
    )


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def driver(llm):
    return GenerationDriver(llm, temperature=0.7, max_tokens=500)


@pytest.fixture
def strict_strategy(driver, thresholds):
    return StrictKBStrategy(driver, thresholds)


@pytest.fixture
def hybrid_strategy(driver, thresholds):
    return HybridStrategy(driver, thresholds)


@pytest.fixture
def selector(strict_strategy, hybrid_strategy):
    return StrategySelector(strict=strict_strategy, hybrid=hybrid_strategy)


@pytest.fixture
def retriever():
    return FakeRetriever(make_results(0.9, 0.8, 0.5))


@pytest.fixture
def failing_retriever():
    return FakeRetriever(error=RetrievalError("connection refused to db-host:5432"))


@pytest.fixture
def orchestrator(retriever, selector):
    return ChatOrchestrator(retriever, selector)


async def collect(events) -> list:
    return [ev async for ev in events]
