"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from kb_assistant.exceptions import ConfigurationError


class CitationSource(str, Enum):
    INTERNAL_DOCS = "Internal Docs"
    HYBRID = "Hybrid"
    GENERAL_LLM = "General LLM"


@dataclass(frozen=True)
class RetrievalResult:
    content: str
    score: float | None = None
    chunk_id: str | None = None
    metadata: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ConfidenceThresholds:
    strict_kb_confidence_threshold: float
    confidence_threshold_high: float
    confidence_threshold_low: float

    def __post_init__(self) -> None:
        for name in (
            "strict_kb_confidence_threshold",
            "confidence_threshold_high",
            "confidence_threshold_low",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")
        if self.confidence_threshold_low > self.confidence_threshold_high:
            raise ConfigurationError(
                "confidence_threshold_low must not exceed confidence_threshold_high"
            )


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    citation_source: CitationSource
    confidence: float | None = None
    temperature_override: float | None = None


def top_score(results: list[RetrievalResult]) -> float | None:
    """Score of the first (highest ranked) result, or None when there is none."""
    if not results:
        return None
    return results[0].score
