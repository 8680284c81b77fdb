"""FAISS vector store holding chunk text alongside the index, with persistence."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

import faiss
import numpy as np

from kb_assistant.exceptions import ConfigurationError
from kb_assistant.observability.logger import get_logger

logger = get_logger("faiss_store")

SUPPORTED_METRICS = ("cosine", "l2")


@dataclass
class StoredChunk:
    chunk_id: str
    content: str
    metadata: dict = field(default_factory=dict)


class FAISSVectorStore:
    def __init__(
        self,
        dimensions: int,
        similarity_metric: str = "cosine",
        index_path: str | None = None,
    ) -> None:
        if similarity_metric not in SUPPORTED_METRICS:
            raise ConfigurationError(
                f"Unsupported similarity metric {similarity_metric!r}; "
                f"expected one of {', '.join(SUPPORTED_METRICS)}"
            )
        self._dimensions = dimensions
        self._metric = similarity_metric
        self._index_path = index_path
        self._index = faiss.IndexIDMap(self._new_flat_index())
        self._chunks: dict[int, StoredChunk] = {}
        self._chunk_id_to_int: dict[str, int] = {}
        self._next_id: int = 0

        if index_path:
            self._try_load(index_path)

    def _new_flat_index(self):
        if self._metric == "cosine":
            return faiss.IndexFlatIP(self._dimensions)
        return faiss.IndexFlatL2(self._dimensions)

    def _check_compatible(self, index, path: str) -> None:
        expected_metric = (
            faiss.METRIC_INNER_PRODUCT if self._metric == "cosine" else faiss.METRIC_L2
        )
        if index.d != self._dimensions:
            raise ConfigurationError(
                f"Index at {path} has {index.d} dimensions, configured {self._dimensions}"
            )
        if index.metric_type != expected_metric:
            raise ConfigurationError(
                f"Index at {path} was not built for similarity metric {self._metric!r}"
            )

    def _try_load(self, path: str) -> None:
        index_file = os.path.join(path, "index.faiss")
        chunks_file = os.path.join(path, "chunks.json")
        if os.path.exists(index_file) and os.path.exists(chunks_file):
            index = faiss.read_index(index_file)
            self._check_compatible(index, path)
            self._index = index
            with open(chunks_file) as f:
                data = json.load(f)
            self._chunks = {int(k): StoredChunk(**v) for k, v in data["chunks"].items()}
            self._chunk_id_to_int = {c.chunk_id: k for k, c in self._chunks.items()}
            self._next_id = data["next_id"]
            logger.info("faiss_loaded", size=self._index.ntotal, path=path)

    def _prepare(self, vectors: np.ndarray) -> np.ndarray:
        vectors = np.array(vectors, dtype=np.float32)
        if vectors.ndim == 1:
            vectors = vectors.reshape(1, -1)
        if vectors.shape[1] != self._dimensions:
            raise ValueError(
                f"Expected {self._dimensions}-dimensional vectors, got {vectors.shape[1]}"
            )
        if self._metric == "cosine":
            faiss.normalize_L2(vectors)
        return vectors

    def add(
        self,
        chunk_ids: list[str],
        contents: list[str],
        embeddings: np.ndarray,
        metadata: list[dict] | None = None,
    ) -> None:
        if len(chunk_ids) == 0:
            return
        if not len(chunk_ids) == len(contents) == len(embeddings):
            raise ValueError("chunk_ids, contents and embeddings must have equal length")
        metadata = metadata or [{} for _ in chunk_ids]
        vectors = self._prepare(embeddings)

        int_ids = []
        for cid, content, meta in zip(chunk_ids, contents, metadata):
            existing = self._chunk_id_to_int.get(cid)
            if existing is not None:
                self._index.remove_ids(np.array([existing], dtype=np.int64))
                int_id = existing
            else:
                int_id = self._next_id
                self._next_id += 1
                self._chunk_id_to_int[cid] = int_id
            self._chunks[int_id] = StoredChunk(chunk_id=cid, content=content, metadata=meta)
            int_ids.append(int_id)

        self._index.add_with_ids(vectors, np.array(int_ids, dtype=np.int64))
        logger.info("faiss_added", count=len(chunk_ids), total=self._index.ntotal)

    def search(self, query_embedding: np.ndarray, top_k: int) -> list[tuple[StoredChunk, float]]:
        """Best matches first, each with a similarity score in [0, 1]."""
        if self._index.ntotal == 0 or top_k <= 0:
            return []
        query = self._prepare(query_embedding)
        raw_scores, indices = self._index.search(query, min(top_k, self._index.ntotal))
        results = []
        for idx, raw in zip(indices[0], raw_scores[0]):
            idx = int(idx)
            if idx == -1:
                continue
            chunk = self._chunks.get(idx)
            if chunk:
                results.append((chunk, self._similarity(float(raw))))
        results.sort(key=lambda pair: pair[1], reverse=True)
        return results

    def _similarity(self, raw: float) -> float:
        if self._metric == "cosine":
            return max(0.0, min(1.0, raw))
        # IndexFlatL2 reports squared distances
        return 1.0 / (1.0 + float(np.sqrt(max(raw, 0.0))))

    def save(self, path: str | None = None) -> None:
        path = path or self._index_path
        if not path:
            return
        Path(path).mkdir(parents=True, exist_ok=True)
        faiss.write_index(self._index, os.path.join(path, "index.faiss"))
        with open(os.path.join(path, "chunks.json"), "w") as f:
            json.dump(
                {
                    "chunks": {
                        str(k): {"chunk_id": c.chunk_id, "content": c.content, "metadata": c.metadata}
                        for k, c in self._chunks.items()
                    },
                    "next_id": self._next_id,
                },
                f,
            )
        logger.info("faiss_saved", path=path, size=self._index.ntotal)

    @property
    def size(self) -> int:
        return self._index.ntotal

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def similarity_metric(self) -> str:
        return self._metric
