"""
Generic CRUD helpers shared by the course content, embedding and
interaction tables.

Dependencies: sqlalchemy
System role: Primary-key access for every ORM model
"""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key operations for one ORM model.

    Nothing here commits. Services own the transaction and decide when a
    unit of work (an interaction transition, a lesson re-index) is durable.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **fields) -> ModelT:
        """
        Add a row and flush so its generated id is available.

        Args:
            session: Async database session
            **fields: Column values

        Returns:
            ModelT: Pending instance with id assigned
        """
        row = self.model(**fields)
        session.add(row)
        await session.flush()
        return row

    async def get_by_id(self, session: AsyncSession, row_id: UUID) -> ModelT | None:
        """Fetch one row by id, or None."""
        result = await session.execute(select(self.model).where(self.model.id == row_id))
        return result.scalar_one_or_none()

    async def count(self, session: AsyncSession) -> int:
        """Number of rows in the table."""
        result = await session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()
