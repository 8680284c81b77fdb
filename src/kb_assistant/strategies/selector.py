"""Pick the response strategy for a query."""

from __future__ import annotations

from kb_assistant.protocols.strategy import ResponseStrategy


class StrategySelector:
    def __init__(self, strict: ResponseStrategy, hybrid: ResponseStrategy) -> None:
        self._strict = strict
        self._hybrid = hybrid

    def select(self, use_general_llm: bool) -> ResponseStrategy:
        return self._hybrid if use_general_llm else self._strict
