"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from kb_assistant.exceptions import ConfigurationError
from kb_assistant.models.domain import ConfidenceThresholds


class Settings(BaseSettings):
    # API Keys
    google_api_key: str = ""
    openai_api_key: str = ""

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 500

    # Embedding
    embedding_model: str = "text-embedding-3-small"

    # Retrieval
    retrieval_top_k: int = 5
    strict_kb_confidence_threshold: float = 0.45
    confidence_threshold_high: float = 0.7
    confidence_threshold_low: float = 0.4

    # Vector store
    vector_dimensions: int = 1536
    similarity_metric: str = "cosine"
    faiss_index_path: str = "data/faiss_index"

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origin: str = "http://localhost:3000"
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {"env_file": ".env", "env_prefix": "KB_", "frozen": True}

    @field_validator(
        "strict_kb_confidence_threshold",
        "confidence_threshold_high",
        "confidence_threshold_low",
    )
    @classmethod
    def _check_unit_interval(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("confidence thresholds must be within [0, 1]")
        return v

    @model_validator(mode="after")
    def _check_threshold_order(self) -> Settings:
        if self.confidence_threshold_low > self.confidence_threshold_high:
            raise ValueError(
                "confidence_threshold_low must not exceed confidence_threshold_high"
            )
        return self

    def thresholds(self) -> ConfidenceThresholds:
        return ConfidenceThresholds(
            strict_kb_confidence_threshold=self.strict_kb_confidence_threshold,
            confidence_threshold_high=self.confidence_threshold_high,
            confidence_threshold_low=self.confidence_threshold_low,
        )

    def require_credentials(self) -> None:
        """Fail fast before serving when provider credentials are missing."""
        missing = [
            name
            for name, value in (
                ("KB_GOOGLE_API_KEY", self.google_api_key),
                ("KB_OPENAI_API_KEY", self.openai_api_key),
                ("KB_GEMINI_MODEL", self.gemini_model),
                ("KB_EMBEDDING_MODEL", self.embedding_model),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
