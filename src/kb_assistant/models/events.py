"""Stream event taxonomy and its wire codec.

A response is a sequence of zero or more ``token`` events followed by exactly
one terminal outcome: ``citation`` then ``end`` on success, or a lone
``error`` on failure. The same sequence is either pushed to the client as
Server-Sent Events or collapsed into a single JSON body for debugging.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterable, Iterable
from dataclasses import dataclass
from typing import ClassVar, Union

from kb_assistant.models.domain import CitationSource

STREAM_COMPLETE = "Stream complete"


@dataclass(frozen=True)
class TokenEvent:
    text: str

    event: ClassVar[str] = "token"

    @property
    def data(self) -> str:
        return self.text


@dataclass(frozen=True)
class CitationEvent:
    source: CitationSource
    confidence: float | None = None
    notes: str | None = None

    event: ClassVar[str] = "citation"

    @property
    def data(self) -> str:
        payload: dict = {"source": CitationSource(self.source).value}
        if self.confidence is not None:
            payload["confidence"] = self.confidence
        if self.notes is not None:
            payload["notes"] = self.notes
        return json.dumps(payload)


@dataclass(frozen=True)
class EndEvent:
    message: str = STREAM_COMPLETE

    event: ClassVar[str] = "end"

    @property
    def data(self) -> str:
        return self.message


@dataclass(frozen=True)
class ErrorEvent:
    message: str

    event: ClassVar[str] = "error"

    @property
    def data(self) -> str:
        return self.message


StreamEvent = Union[TokenEvent, CitationEvent, EndEvent, ErrorEvent]


def is_terminal(event: StreamEvent) -> bool:
    return event.event in ("end", "error")


def to_wire(event: StreamEvent) -> dict:
    return {"event": event.event, "data": event.data}


def encode_sse(event: StreamEvent) -> str:
    """Frame one event as an SSE message; multi-line payloads get one data line each."""
    lines = [f"event: {event.event}"]
    payload = event.data.replace("\r\n", "\n").replace("\r", "\n")
    lines.extend(f"data: {line}" for line in payload.split("\n"))
    return "\n".join(lines) + "\n\n"


@dataclass
class AggregatedResponse:
    message: str
    citation: dict | None
    events: int


def _parse_citation(data: str) -> dict | None:
    try:
        parsed = json.loads(data)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def aggregate_wire(events: Iterable[dict]) -> AggregatedResponse:
    """Collapse ``{"event", "data"}`` wire dicts into one response."""
    parts: list[str] = []
    citation: dict | None = None
    seen_citation = False
    count = 0
    for ev in events:
        count += 1
        if ev["event"] == "token":
            parts.append(ev["data"])
        elif ev["event"] == "citation" and not seen_citation:
            seen_citation = True
            citation = _parse_citation(ev["data"])
    return AggregatedResponse(message="".join(parts), citation=citation, events=count)


def aggregate_events(events: Iterable[StreamEvent]) -> AggregatedResponse:
    return aggregate_wire(to_wire(ev) for ev in events)


async def aggregate(events: AsyncIterable[StreamEvent]) -> AggregatedResponse:
    collected = [ev async for ev in events]
    return aggregate_events(collected)
