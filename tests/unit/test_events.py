"""Tests for the event taxonomy, SSE framing and aggregation."""

import json

from kb_assistant.models.domain import CitationSource
from kb_assistant.models.events import (
    CitationEvent,
    EndEvent,
    ErrorEvent,
    TokenEvent,
    aggregate,
    aggregate_events,
    aggregate_wire,
    encode_sse,
    is_terminal,
    to_wire,
)


def test_wire_names_and_payloads():
    assert to_wire(TokenEvent("hi")) == {"event": "token", "data": "hi"}
    assert to_wire(EndEvent()) == {"event": "end", "data": "Stream complete"}
    assert to_wire(ErrorEvent("boom")) == {"event": "error", "data": "boom"}


def test_citation_payload_is_json():
    event = CitationEvent(CitationSource.INTERNAL_DOCS, confidence=0, notes="no relevant context found")
    assert json.loads(event.data) == {
        "source": "Internal Docs",
        "confidence": 0,
        "notes": "no relevant context found",
    }


def test_citation_omits_absent_fields():
    assert json.loads(CitationEvent(CitationSource.GENERAL_LLM).data) == {"source": "General LLM"}


def test_terminal_events():
    assert is_terminal(EndEvent())
    assert is_terminal(ErrorEvent("x"))
    assert not is_terminal(TokenEvent("x"))
    assert not is_terminal(CitationEvent(CitationSource.HYBRID, 0.5))


def test_encode_sse_single_line():
    assert encode_sse(TokenEvent("Hello")) == "event: token\ndata: Hello\n\n"


def test_encode_sse_splits_multiline_payload():
    assert encode_sse(TokenEvent("a\nb")) == "event: token\ndata: a\ndata: b\n\n"


def test_aggregate_wire_sequence():
    result = aggregate_wire(
        [
            {"event": "token", "data": "A"},
            {"event": "token", "data": "B"},
            {"event": "citation", "data": '{"source":"Hybrid","confidence":0.5}'},
            {"event": "end", "data": "Stream complete"},
        ]
    )
    assert result.message == "AB"
    assert result.citation == {"source": "Hybrid", "confidence": 0.5}
    assert result.events == 4


def test_aggregate_malformed_citation_is_null():
    result = aggregate_wire(
        [
            {"event": "token", "data": "A"},
            {"event": "citation", "data": "{not json"},
            {"event": "end", "data": "Stream complete"},
        ]
    )
    assert result.message == "A"
    assert result.citation is None
    assert result.events == 3


def test_aggregate_error_sequence_has_no_citation():
    result = aggregate_events([TokenEvent("A"), ErrorEvent("failed")])
    assert result.message == "A"
    assert result.citation is None
    assert result.events == 2


async def test_aggregate_async_iterable():
    async def events():
        yield TokenEvent("x")
        yield CitationEvent(CitationSource.HYBRID, 0.5)
        yield EndEvent()

    result = await aggregate(events())
    assert result.message == "x"
    assert result.citation == {"source": "Hybrid", "confidence": 0.5}
    assert result.events == 3


def test_encode_sse_normalizes_carriage_returns():
    assert encode_sse(TokenEvent("a\rb\r\nc")) == "event: token\ndata: a\ndata: b\ndata: c\n\n"


def test_encode_sse_keeps_trailing_newline():
    assert encode_sse(TokenEvent("a\n")) == "event: token\ndata: a\ndata: \n\n"
