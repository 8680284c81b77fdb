"""Retriever backed by query embeddings and the FAISS store."""

from __future__ import annotations

import asyncio

import numpy as np

from kb_assistant.exceptions import RetrievalError
from kb_assistant.models.domain import RetrievalResult
from kb_assistant.observability.logger import get_logger
from kb_assistant.protocols.embedder import Embedder
from kb_assistant.retrieval.faiss_store import FAISSVectorStore

logger = get_logger("vector_retriever")


class VectorRetriever:
    def __init__(self, embedder: Embedder, store: FAISSVectorStore, top_k: int = 5) -> None:
        self._embedder = embedder
        self._store = store
        self._top_k = top_k

    async def search(self, query: str) -> list[RetrievalResult]:
        try:
            embedding = await self._embedder.embed_query(query)
            hits = await asyncio.to_thread(
                self._store.search, np.asarray(embedding, dtype=np.float32), self._top_k
            )
        except RetrievalError:
            raise
        except Exception as e:
            raise RetrievalError(f"Vector search failed: {e}") from e

        results = [
            RetrievalResult(
                content=chunk.content,
                score=score,
                chunk_id=chunk.chunk_id,
                metadata=chunk.metadata,
            )
            for chunk, score in hits
        ]
        logger.debug(
            "vector_search",
            results=len(results),
            top_score=round(results[0].score, 3) if results else None,
        )
        return results

    async def stats(self) -> dict:
        return {
            "total_chunks": self._store.size,
            "dimensions": self._store.dimensions,
            "similarity_metric": self._store.similarity_metric,
        }
