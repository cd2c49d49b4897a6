"""
Chat domain models and schemas.

Request/response schemas for course Q&A and tutor chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from dsa_assistant.boundary.db.models.chat_interaction_model import InteractionStatus
from dsa_assistant.models.common import PageResponse

MAX_MESSAGE_LENGTH = 2000


class ChatRequest(BaseModel):
    """Request schema for a course Q&A question."""

    message: str = Field(
        max_length=MAX_MESSAGE_LENGTH,
        description="User question",
    )

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message cannot be empty")
        return value


class ChapterReference(BaseModel):
    """Chapter related to an answer, ranked by relevance."""

    chapter_id: uuid.UUID
    chapter_title: str
    relevance_score: float = Field(ge=0.0, le=1.0)


class ChatResponse(BaseModel):
    """Response schema for a course Q&A answer."""

    id: str = Field(description="Interaction identifier, prefixed 'chat_'")
    content: str
    confidence_score: float = Field(ge=0.0, le=1.0)
    related_chapters: list[ChapterReference]
    timestamp: datetime


class ChatInteractionResponse(BaseModel):
    """Single logged interaction in a user's history."""

    id: uuid.UUID
    question: str
    response: str | None = None
    status: InteractionStatus
    error_detail: str | None = None
    confidence_score: float | None = None
    retrieved_chunk_count: int | None = None
    related_chapter_ids: list[str] = Field(default_factory=list)
    question_timestamp: datetime
    response_timestamp: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("related_chapter_ids", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or []


class ChatHistoryPage(PageResponse[ChatInteractionResponse]):
    """One page of a user's interaction history, newest first."""


class ChatMessageRequest(BaseModel):
    """Request schema for the DSA tutor chatbot."""

    message: str = Field(max_length=MAX_MESSAGE_LENGTH, description="User message")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message cannot be empty")
        return value


class ChatMessageResponse(BaseModel):
    """Reply from the DSA tutor chatbot."""

    id: str
    role: str = Field(default="assistant", description="Message role")
    content: str
    timestamp: datetime
