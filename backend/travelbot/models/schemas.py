"""Pydantic schemas for API contracts."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class DialogueState(str, Enum):
    new = "NEW"
    awaiting = "AWAITING"
    complete = "COMPLETE"


class ChatMessageRequest(BaseModel):
    session_id: str = Field(default="default", max_length=200)
    message: str | None = None

    @field_validator("session_id", mode="before")
    @classmethod
    def _default_session_id(cls, value: Any) -> str:
        text = str(value or "").strip()
        return text or "default"

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> str | None:
        if isinstance(value, (str, int, float)):
            return str(value)
        return None


class AirtableResult(BaseModel):
    ok: bool
    action: Literal["update", "create"] | None = None
    id: str | None = None
    reason: str | None = None


class ChatMessageResponse(BaseModel):
    reply: str
    ask_field: str | None = None
    suggestions: list[str] = Field(default_factory=list)
    recap: str | None = None
    airtable: AirtableResult | None = None


class ComposedReply(BaseModel):
    reply: str
    suggestions: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True


class AirtableProbeResponse(BaseModel):
    ok: bool
    status: int | None = None
    sample: dict[str, Any] | None = None
    error: str | None = None
    need: dict[str, bool] | None = None
