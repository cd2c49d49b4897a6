"""
Lesson embedding CRUD operations.

Embedding store: per-lesson destructive replace plus a full scan used by
linear similarity search.

Dependencies: sqlalchemy, dsa_assistant.boundary.db.models, dsa_assistant.core
System role: Embedding persistence for retrieval
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.boundary.db.models.chapter_model import ChapterModel
from dsa_assistant.boundary.db.models.embedding_model import LessonEmbeddingModel
from dsa_assistant.boundary.db.models.lesson_model import LessonModel
from dsa_assistant.boundary.db.CRUD.base_crud import BaseCRUD
from dsa_assistant.core.exceptions import InternalInconsistencyError
from dsa_assistant.core.schemas import EmbeddingRecord, TextChunk


class EmbeddingCRUD(BaseCRUD[LessonEmbeddingModel]):
    """
    CRUD operations for LessonEmbeddingModel.

    replace_for_document deletes and inserts in the caller's transaction;
    the caller commits once so readers never observe the gap between them.
    """

    def __init__(self) -> None:
        """Initialize EmbeddingCRUD with LessonEmbeddingModel."""
        super().__init__(LessonEmbeddingModel)

    async def replace_for_document(
        self,
        session: AsyncSession,
        lesson_id: UUID,
        chunks: Sequence[TextChunk],
        vectors: Sequence[Sequence[float]],
    ) -> int:
        """
        Replace all embeddings of a lesson with a new set.

        Args:
            session: Async database session
            lesson_id: Lesson whose embeddings are replaced
            chunks: Chunks in index order
            vectors: One vector per chunk, same order

        Returns:
            Number of rows inserted

        Raises:
            InternalInconsistencyError: If chunk and vector counts differ
        """
        if len(chunks) != len(vectors):
            raise InternalInconsistencyError(
                "Mismatch between chunks and embeddings count",
                {"chunks": len(chunks), "embeddings": len(vectors)},
            )

        await self.delete_for_document(session, lesson_id)
        session.add_all(
            [
                LessonEmbeddingModel(
                    lesson_id=lesson_id,
                    chunk_text=chunk.text,
                    chunk_index=chunk.index,
                    vector=[float(x) for x in vector],
                )
                for chunk, vector in zip(chunks, vectors)
            ]
        )
        await session.flush()
        return len(chunks)

    async def scan_all(self, session: AsyncSession) -> list[EmbeddingRecord]:
        """
        Read every embedding that has a vector, with lesson and chapter labels.

        Rows are ordered by lesson then chunk index so ties in similarity
        resolve deterministically.

        Args:
            session: Async database session

        Returns:
            list[EmbeddingRecord]: Detached snapshots of stored embeddings
        """
        stmt = (
            select(
                LessonEmbeddingModel,
                LessonModel.title,
                LessonModel.chapter_id,
                ChapterModel.title,
            )
            .join(LessonModel, LessonEmbeddingModel.lesson_id == LessonModel.id)
            .outerjoin(ChapterModel, LessonModel.chapter_id == ChapterModel.id)
            .where(LessonEmbeddingModel.vector.is_not(None))
            .order_by(
                ChapterModel.order_index,
                LessonModel.order_index,
                LessonEmbeddingModel.lesson_id,
                LessonEmbeddingModel.chunk_index,
            )
        )
        result = await session.execute(stmt)
        return [
            EmbeddingRecord(
                id=row.id,
                source_document_id=row.lesson_id,
                chunk_text=row.chunk_text,
                chunk_index=row.chunk_index,
                vector=tuple(row.vector),
                chapter_id=chapter_id,
                lesson_title=lesson_title,
                chapter_title=chapter_title,
                created_at=row.created_at,
            )
            for row, lesson_title, chapter_id, chapter_title in result.all()
        ]

    async def get_for_document(
        self,
        session: AsyncSession,
        lesson_id: UUID,
    ) -> Sequence[LessonEmbeddingModel]:
        """
        Retrieve a lesson's embeddings in chunk order.

        Args:
            session: Async database session
            lesson_id: Lesson UUID

        Returns:
            Sequence of LessonEmbeddingModel ordered by chunk_index
        """
        stmt = (
            select(LessonEmbeddingModel)
            .where(LessonEmbeddingModel.lesson_id == lesson_id)
            .order_by(LessonEmbeddingModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_for_document(self, session: AsyncSession, lesson_id: UUID) -> int:
        """Count stored embeddings for one lesson."""
        stmt = (
            select(func.count())
            .select_from(LessonEmbeddingModel)
            .where(LessonEmbeddingModel.lesson_id == lesson_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def delete_for_document(self, session: AsyncSession, lesson_id: UUID) -> int:
        """
        Delete all embeddings of a lesson.

        Args:
            session: Async database session
            lesson_id: Lesson UUID

        Returns:
            Number of rows deleted
        """
        stmt = delete(LessonEmbeddingModel).where(LessonEmbeddingModel.lesson_id == lesson_id)
        result = await session.execute(stmt)
        return result.rowcount


embedding_crud = EmbeddingCRUD()
