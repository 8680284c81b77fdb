"""OpenAI query embeddings."""

from __future__ import annotations

from openai import AsyncOpenAI

from kb_assistant.exceptions import EmbeddingError
from kb_assistant.observability.logger import get_logger

logger = get_logger("embeddings")


class OpenAIEmbedder:
    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimensions: int = 1536,
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key)
        self._model = model
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def embed_query(self, query: str) -> list[float]:
        try:
            response = await self._client.embeddings.create(input=[query], model=self._model)
            embedding = response.data[0].embedding
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}") from e
        if len(embedding) != self._dimensions:
            raise EmbeddingError(
                f"Embedding has {len(embedding)} dimensions, expected {self._dimensions}"
            )
        return embedding
