"""
Lesson embedding ORM model.

One row per chunk of a lesson. A lesson owns a contiguous family of rows
with chunk_index 0..n-1.

Dependencies: sqlalchemy, dsa_assistant.boundary.db.base
System role: Embedding store backing similarity search
"""

import uuid

from sqlalchemy import ForeignKey, Integer, JSON, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dsa_assistant.boundary.db.base import Base, UUIDMixin, TimestampMixin


class LessonEmbeddingModel(Base, UUIDMixin, TimestampMixin):
    """
    Stored chunk text and vector for one lesson chunk.

    Attributes:
        id: UUID primary key
        lesson_id: Source lesson (rows are removed with the lesson)
        chunk_text: Chunk content
        chunk_index: 0-based position within the lesson
        vector: Embedding as a JSON float array

    Constraints:
        (lesson_id, chunk_index): UNIQUE
    """

    __tablename__ = "lesson_embeddings"
    __table_args__ = (
        UniqueConstraint("lesson_id", "chunk_index", name="uq_lesson_embeddings_lesson_chunk"),
    )

    lesson_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    chunk_text: Mapped[str] = mapped_column(Text, nullable=False)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    vector: Mapped[list[float] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
    )
