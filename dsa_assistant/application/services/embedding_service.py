"""
Embedding service for lesson indexing.

Chunks lesson text, embeds the chunks and replaces the lesson's stored
embeddings. Replacement for one lesson is serialized through a keyed lock
and committed in a single transaction.

Dependencies: dsa_assistant.core, dsa_assistant.boundary.db, dsa_assistant.boundary.llm
System role: Indexing pipeline for retrieval
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.boundary.db.CRUD.content_crud import lesson_crud
from dsa_assistant.boundary.db.CRUD.embedding_crud import embedding_crud
from dsa_assistant.boundary.llm.providers import EmbeddingProvider
from dsa_assistant.configs.rag import RAGSettings
from dsa_assistant.core.chunker import chunk_text, validate_chunk_params
from dsa_assistant.core.exceptions import AssistantError, ContentNotFoundError
from dsa_assistant.core.locks import KeyedLockRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmbedAllResult:
    """Outcome of indexing every lesson."""

    lessons_processed: int
    lessons_failed: int
    chunks_created: int


class EmbeddingService:
    """Lesson indexing service."""

    def __init__(
        self,
        db: AsyncSession,
        embedding_provider: EmbeddingProvider,
        locks: KeyedLockRegistry,
        rag_settings: RAGSettings,
    ) -> None:
        """
        Initialize embedding service.

        Args:
            db: AsyncSession for database operations
            embedding_provider: Embeds chunk texts
            locks: Per-lesson lock registry shared across requests
            rag_settings: Default chunk size and overlap
        """
        self.db = db
        self.embedding_provider = embedding_provider
        self.locks = locks
        self.settings = rag_settings

    async def embed_document(
        self,
        lesson_id: UUID,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
    ) -> int:
        """
        (Re)index one lesson.

        Blank lessons are left untouched and report 0 chunks.

        Args:
            lesson_id: Lesson to index
            chunk_size: Characters per chunk (defaults to settings)
            chunk_overlap: Characters shared by adjacent chunks (defaults to settings)

        Returns:
            int: Number of chunks stored

        Raises:
            InvalidArgumentError: If chunk parameters are invalid
            ContentNotFoundError: If the lesson does not exist
            ProviderUnavailableError: If the embedding provider fails
            InternalInconsistencyError: If chunk and vector counts differ
        """
        size = chunk_size if chunk_size is not None else self.settings.chunk_size
        overlap = chunk_overlap if chunk_overlap is not None else self.settings.chunk_overlap
        validate_chunk_params(size, overlap)

        lesson = await lesson_crud.get_by_id(self.db, lesson_id)
        if lesson is None:
            raise ContentNotFoundError("Lesson", lesson_id)

        if not lesson.content or not lesson.content.strip():
            logger.warning(f"{__name__}:embed_document - Lesson {lesson_id} has no content to embed")
            return 0

        chunks = chunk_text(lesson.content, size, overlap)
        logger.info(
            f"{__name__}:embed_document - Lesson {lesson_id} '{lesson.title}' split into "
            f"{len(chunks)} chunks (size={size}, overlap={overlap})"
        )

        vectors = await self.embedding_provider.embed([chunk.text for chunk in chunks])

        async with self.locks.hold(lesson_id):
            try:
                created = await embedding_crud.replace_for_document(
                    self.db, lesson_id, chunks, vectors
                )
                await self.db.commit()
            except Exception:
                await self.db.rollback()
                raise

        logger.info(f"{__name__}:embed_document - Stored {created} embeddings for lesson {lesson_id}")
        return created

    async def embed_all_lessons(self) -> EmbedAllResult:
        """
        Index every lesson with default chunking.

        Lessons that fail are logged and skipped.

        Returns:
            EmbedAllResult: Processed, failed and chunk counts
        """
        lesson_ids = await lesson_crud.get_all_ids(self.db)
        logger.info(f"{__name__}:embed_all_lessons - START {len(lesson_ids)} lessons")

        processed = 0
        failed = 0
        total_chunks = 0
        for lesson_id in lesson_ids:
            try:
                total_chunks += await self.embed_document(lesson_id)
                processed += 1
            except AssistantError as e:
                failed += 1
                logger.error(
                    f"{__name__}:embed_all_lessons - Failed to embed lesson {lesson_id}: "
                    f"{type(e).__name__}: {e.message}"
                )

        logger.info(
            f"{__name__}:embed_all_lessons - DONE processed={processed} failed={failed} "
            f"chunks={total_chunks}"
        )
        return EmbedAllResult(
            lessons_processed=processed,
            lessons_failed=failed,
            chunks_created=total_chunks,
        )

    async def delete_document_embeddings(self, lesson_id: UUID) -> int:
        """
        Remove all embeddings of a lesson.

        Args:
            lesson_id: Lesson UUID

        Returns:
            int: Number of embeddings deleted
        """
        async with self.locks.hold(lesson_id):
            try:
                deleted = await embedding_crud.delete_for_document(self.db, lesson_id)
                await self.db.commit()
            except Exception:
                await self.db.rollback()
                raise

        logger.info(f"{__name__}:delete_document_embeddings - Deleted {deleted} embeddings for lesson {lesson_id}")
        return deleted

    async def count_document_embeddings(self, lesson_id: UUID) -> int:
        """Count stored embeddings for a lesson."""
        return await embedding_crud.count_for_document(self.db, lesson_id)
