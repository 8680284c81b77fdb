"""Custom exception hierarchy for the knowledge-base assistant."""


class KBAssistantError(Exception):
    """Base exception for all assistant errors."""


class RetrievalError(KBAssistantError):
    """Error during knowledge-base retrieval."""


class EmbeddingError(RetrievalError):
    """Error generating query embeddings."""


class GenerationError(KBAssistantError):
    """Error during answer generation."""


class ConfigurationError(KBAssistantError):
    """Error in system configuration."""
