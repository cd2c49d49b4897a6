"""
Chat interaction ORM model.

Durable record of one question/answer cycle. Rows are created PENDING
before any provider call and move exactly once to COMPLETED or FAILED.

Dependencies: sqlalchemy, dsa_assistant.boundary.db.base
System role: Audit log and history source for course Q&A
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Float, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dsa_assistant.boundary.db.base import Base, UUIDMixin, TimestampMixin, utc_now


class InteractionStatus(str, enum.Enum):
    """
    Interaction lifecycle states.

    PENDING: Question accepted, pipeline running
    COMPLETED: Answer generated; response and retrieval stats populated
    FAILED: Pipeline raised; error_detail describes the failure
    """

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class ChatInteractionModel(Base, UUIDMixin, TimestampMixin):
    """
    Chat interaction ORM model.

    Attributes:
        id: UUID primary key
        user_id: Asking user
        question: Question text
        response: Generated answer (COMPLETED only)
        status: Lifecycle state
        error_detail: Failure description (FAILED only)
        confidence_score: Retrieval confidence in [0, 1], 0 on failure
        retrieved_chunk_count: Chunks used as context, 0 on failure
        related_chapter_ids: Ranked chapter ids as strings, empty on failure
        question_timestamp: When the question was accepted
        response_timestamp: When the row reached a terminal state
        created_at: Row creation timestamp

    Invariants:
        response_timestamp >= question_timestamp once terminal
    """

    __tablename__ = "chat_interactions"
    __table_args__ = (
        Index("ix_chat_interactions_user_question_ts", "user_id", "question_timestamp"),
    )

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[InteractionStatus] = mapped_column(
        Enum(InteractionStatus, native_enum=False),
        nullable=False,
        default=InteractionStatus.PENDING,
    )
    error_detail: Mapped[str | None] = mapped_column(Text, nullable=True)

    confidence_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    retrieved_chunk_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    related_chapter_ids: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    question_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    response_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
