"""
Lesson ORM model.

Lesson rows hold the raw text that is chunked and embedded for retrieval.

Dependencies: sqlalchemy, dsa_assistant.boundary.db.base
System role: Document source for the embedding pipeline
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dsa_assistant.boundary.db.base import Base, UUIDMixin, TimestampMixin


class LessonModel(Base, UUIDMixin, TimestampMixin):
    """
    Lesson ORM model.

    Attributes:
        id: UUID primary key
        chapter_id: Owning chapter
        title: Lesson title shown in context source labels
        content: Raw lesson text (may be empty)
        order_index: Position within the chapter
    """

    __tablename__ = "lessons"

    chapter_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("chapters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    chapter: Mapped["ChapterModel"] = relationship(back_populates="lessons")  # noqa: F821
