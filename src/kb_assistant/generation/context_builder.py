"""Render retrieved passages as a numbered, score-annotated context block."""

from __future__ import annotations

from kb_assistant.models.domain import RetrievalResult

CHUNK_SEPARATOR = "\n\n---\n\n"


def format_chunk(result: RetrievalResult, idx: int) -> str:
    chunk_id = result.chunk_id if result.chunk_id is not None else f"chunk-{idx}"
    score = result.score if result.score is not None else 0.0
    return f"[Chunk {idx} | id:{chunk_id} | score:{score:.3f}]\n{result.content}"


def build_context(results: list[RetrievalResult], max_chunks: int = 5) -> str:
    """Join the first ``max_chunks`` results in retrieval order."""
    return CHUNK_SEPARATOR.join(
        format_chunk(r, i) for i, r in enumerate(results[: max(max_chunks, 0)], 1)
    )
