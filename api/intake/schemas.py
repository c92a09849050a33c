from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional


INVITEE_CREATED = "invitee.created"


class AnswerEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    question: str = ""
    answer: str = ""

    @field_validator("question", "answer", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class InviteePayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None
    questions_and_answers: list[AnswerEntry] = Field(default_factory=list)

    @field_validator("questions_and_answers", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v


class InboundEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    event: str
    payload: InviteePayload


class WebhookResult(BaseModel):
    success: bool = True
    recordId: str
    candidateName: str
    enrichment: str  # "skipped" | "success" | "failed: <reason>"


class IgnoredResult(BaseModel):
    message: str = "Event ignored"
    event: Optional[str] = None


class ErrorResult(BaseModel):
    error: str
    message: Optional[str] = None
