"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(min_length=1)
    use_general_llm: bool = Field(alias="useGeneralLLM")
    # Accepted and validated, not yet used when building prompts.
    conversation_history: list[ChatMessage] | None = Field(
        default=None, alias="conversationHistory"
    )

    @field_validator("query")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query must not be blank")
        return v


class ChatTestResponse(BaseModel):
    message: str
    citation: dict | None
    events: int


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    stats: dict
