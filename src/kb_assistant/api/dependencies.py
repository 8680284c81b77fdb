"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from kb_assistant.pipeline.chat_orchestrator import ChatOrchestrator


def get_orchestrator(request: Request) -> ChatOrchestrator:
    return request.app.state.orchestrator
