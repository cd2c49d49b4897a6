"""
Chat interaction CRUD operations.

Lifecycle transitions for the Q&A log and per-user history queries.

Dependencies: sqlalchemy, dsa_assistant.boundary.db.models
System role: Chat interaction persistence
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.boundary.db.base import ensure_utc, utc_now
from dsa_assistant.boundary.db.models.chat_interaction_model import (
    ChatInteractionModel,
    InteractionStatus,
)
from dsa_assistant.boundary.db.CRUD.base_crud import BaseCRUD


class ChatInteractionCRUD(BaseCRUD[ChatInteractionModel]):
    """
    CRUD operations for ChatInteractionModel.

    Terminal transitions only touch rows still in PENDING, so a
    COMPLETED or FAILED row is never rewritten.
    """

    def __init__(self) -> None:
        """Initialize ChatInteractionCRUD with ChatInteractionModel."""
        super().__init__(ChatInteractionModel)

    async def create_pending(
        self,
        session: AsyncSession,
        user_id: str,
        question: str,
        question_timestamp: datetime | None = None,
    ) -> ChatInteractionModel:
        """
        Log a newly accepted question.

        Args:
            session: Async database session
            user_id: Asking user
            question: Question text
            question_timestamp: Acceptance time (defaults to now)

        Returns:
            ChatInteractionModel in PENDING state
        """
        return await self.create(
            session,
            user_id=user_id,
            question=question,
            status=InteractionStatus.PENDING,
            question_timestamp=question_timestamp or utc_now(),
        )

    async def mark_completed(
        self,
        session: AsyncSession,
        id: UUID,
        question_timestamp: datetime,
        response: str,
        confidence_score: float,
        retrieved_chunk_count: int,
        related_chapter_ids: list[str],
    ) -> datetime | None:
        """
        Move a PENDING interaction to COMPLETED.

        Args:
            session: Async database session
            id: Interaction UUID
            question_timestamp: Acceptance time, lower bound for response_timestamp
            response: Generated answer
            confidence_score: Retrieval confidence, stored to 4 decimals
            retrieved_chunk_count: Number of context chunks
            related_chapter_ids: Ranked chapter ids

        Returns:
            Response timestamp if the row transitioned, None if it was not PENDING
        """
        return await self._finish(
            session,
            id,
            question_timestamp,
            status=InteractionStatus.COMPLETED,
            response=response,
            confidence_score=round(confidence_score, 4),
            retrieved_chunk_count=retrieved_chunk_count,
            related_chapter_ids=related_chapter_ids,
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        question_timestamp: datetime,
        error_detail: str,
    ) -> datetime | None:
        """
        Move a PENDING interaction to FAILED.

        Args:
            session: Async database session
            id: Interaction UUID
            question_timestamp: Acceptance time, lower bound for response_timestamp
            error_detail: Human-readable failure description

        Returns:
            Response timestamp if the row transitioned, None if it was not PENDING
        """
        return await self._finish(
            session,
            id,
            question_timestamp,
            status=InteractionStatus.FAILED,
            error_detail=error_detail,
            confidence_score=0.0,
            retrieved_chunk_count=0,
            related_chapter_ids=[],
        )

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int,
        offset: int = 0,
    ) -> Sequence[ChatInteractionModel]:
        """
        Retrieve a user's interactions, newest question first.

        Args:
            session: Async database session
            user_id: Owner of the interactions
            limit: Page size
            offset: Rows to skip

        Returns:
            Sequence of ChatInteractionModel
        """
        stmt = (
            select(ChatInteractionModel)
            .where(ChatInteractionModel.user_id == user_id)
            .order_by(
                ChatInteractionModel.question_timestamp.desc(),
                ChatInteractionModel.created_at.desc(),
            )
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_user(self, session: AsyncSession, user_id: str) -> int:
        """Count a user's interactions."""
        stmt = (
            select(func.count())
            .select_from(ChatInteractionModel)
            .where(ChatInteractionModel.user_id == user_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def _finish(
        self,
        session: AsyncSession,
        id: UUID,
        question_timestamp: datetime,
        **values,
    ) -> datetime | None:
        response_timestamp = max(utc_now(), ensure_utc(question_timestamp))
        stmt = (
            update(ChatInteractionModel)
            .where(
                ChatInteractionModel.id == id,
                ChatInteractionModel.status == InteractionStatus.PENDING,
            )
            .values(response_timestamp=response_timestamp, **values)
        )
        result = await session.execute(stmt)
        return response_timestamp if result.rowcount > 0 else None


chat_interaction_crud = ChatInteractionCRUD()
