"""
Course content CRUD operations.

Read access to chapters and lessons for the embedding pipeline.

Dependencies: sqlalchemy, dsa_assistant.boundary.db.models
System role: Document source for lesson text and attribution labels
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.boundary.db.models.chapter_model import ChapterModel
from dsa_assistant.boundary.db.models.lesson_model import LessonModel
from dsa_assistant.boundary.db.CRUD.base_crud import BaseCRUD


class ChapterCRUD(BaseCRUD[ChapterModel]):
    """CRUD operations for ChapterModel."""

    def __init__(self) -> None:
        """Initialize ChapterCRUD with ChapterModel."""
        super().__init__(ChapterModel)


class LessonCRUD(BaseCRUD[LessonModel]):
    """CRUD operations for LessonModel."""

    def __init__(self) -> None:
        """Initialize LessonCRUD with LessonModel."""
        super().__init__(LessonModel)

    async def get_all_ids(self, session: AsyncSession) -> Sequence[UUID]:
        """
        List every lesson id in chapter then lesson order.

        Args:
            session: Async database session

        Returns:
            Sequence of lesson UUIDs
        """
        stmt = (
            select(LessonModel.id)
            .join(ChapterModel, LessonModel.chapter_id == ChapterModel.id)
            .order_by(ChapterModel.order_index, LessonModel.order_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


chapter_crud = ChapterCRUD()
lesson_crud = LessonCRUD()
