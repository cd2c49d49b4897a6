"""
Chapter ORM model.

Course syllabus unit that groups lessons. Chapter ids and titles are used
to attribute answers back to course structure.

Dependencies: sqlalchemy, dsa_assistant.boundary.db.base
System role: Source of chapter labels for retrieval attribution
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dsa_assistant.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ChapterModel(Base, UUIDMixin, TimestampMixin):
    """
    Chapter ORM model.

    Attributes:
        id: UUID primary key
        title: Chapter title shown in answer attributions
        order_index: Position of the chapter within its course
        course_title: Owning course name
        lessons: Lessons belonging to this chapter
    """

    __tablename__ = "chapters"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    course_title: Mapped[str | None] = mapped_column(String(255), nullable=True)

    lessons: Mapped[list["LessonModel"]] = relationship(  # noqa: F821
        back_populates="chapter",
        cascade="all, delete-orphan",
        order_by="LessonModel.order_index",
    )
