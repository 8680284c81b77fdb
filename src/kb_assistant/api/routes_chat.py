"""Chat endpoints: live SSE stream, aggregated debug response, health."""

from __future__ import annotations

from contextlib import aclosing
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from kb_assistant.api.dependencies import get_orchestrator
from kb_assistant.models.events import encode_sse
from kb_assistant.models.schemas import ChatQuery, ChatTestResponse, HealthResponse
from kb_assistant.observability.logger import get_logger
from kb_assistant.pipeline.chat_orchestrator import ChatOrchestrator

logger = get_logger("routes_chat")

router = APIRouter(prefix="/api/chat")


@router.post("/stream")
async def chat_stream(
    body: ChatQuery,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
):
    """Stream token, citation, end and error events as Server-Sent Events."""

    async def event_generator():
        async with aclosing(orchestrator.handle(body)) as events:
            async for event in events:
                yield encode_sse(event)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/test", response_model=ChatTestResponse)
async def chat_test(
    body: ChatQuery,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
) -> ChatTestResponse:
    logger.info("test_request", query=body.query[:50])
    result = await orchestrator.handle_aggregated(body)
    return ChatTestResponse(
        message=result.message,
        citation=result.citation,
        events=result.events,
    )


@router.get("/health", response_model=HealthResponse)
async def health(
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        stats=await orchestrator.stats(),
    )
