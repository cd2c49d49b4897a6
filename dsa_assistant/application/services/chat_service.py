"""
Chat service for course Q&A with retrieval-augmented generation.

Orchestrates the full question flow: interaction logging, question
embedding, similarity search, confidence scoring, chapter attribution,
prompt assembly and answer generation.

Dependencies: dsa_assistant.core, dsa_assistant.boundary.db, dsa_assistant.boundary.llm
System role: Q&A pipeline orchestration layer
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.boundary.db.base import utc_now
from dsa_assistant.boundary.db.CRUD.chat_interaction_crud import chat_interaction_crud
from dsa_assistant.boundary.llm.providers import CompletionProvider, EmbeddingProvider
from dsa_assistant.boundary.vdb.linear_scan_index import LinearScanIndex
from dsa_assistant.configs.rag import RAGSettings
from dsa_assistant.core.confidence import score_confidence
from dsa_assistant.core.context_builder import attribute_chapters, build_context
from dsa_assistant.core.exceptions import (
    AssistantError,
    InternalInconsistencyError,
    InvalidArgumentError,
)
from dsa_assistant.core.prompts import QA_SYSTEM_PROMPT, build_user_prompt
from dsa_assistant.core.similarity import SimilaritySearchIndex
from dsa_assistant.models.chat import (
    ChapterReference,
    ChatHistoryPage,
    ChatInteractionResponse,
    ChatResponse,
)
from dsa_assistant.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

RESPONSE_ID_PREFIX = "chat_"


class ChatService:
    """
    Course Q&A service.

    Every accepted question is logged PENDING before any provider call and
    ends COMPLETED or FAILED; failures are recorded and then re-raised.
    """

    def __init__(
        self,
        db: AsyncSession,
        embedding_provider: EmbeddingProvider,
        completion_provider: CompletionProvider,
        rag_settings: RAGSettings,
        index: SimilaritySearchIndex | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            embedding_provider: Embeds the question
            completion_provider: Generates the answer
            rag_settings: Retrieval depth, threshold and question limits
            index: Similarity search backend (defaults to a linear scan)
        """
        self.db = db
        self.embedding_provider = embedding_provider
        self.completion_provider = completion_provider
        self.settings = rag_settings
        self.index = index or LinearScanIndex(db)

    async def ask(self, question: str, user_id: str) -> ChatResponse:
        """
        Answer a question from course materials.

        Flow:
        1. Validate input (no side effects on failure)
        2. Log interaction as PENDING and commit
        3. Embed question, search, score, attribute and build the prompt
        4. Generate the answer
        5. Mark interaction COMPLETED, or FAILED if any step raised

        Args:
            question: User question
            user_id: Asking user

        Returns:
            ChatResponse: Answer with confidence and related chapters

        Raises:
            InvalidArgumentError: If question or user id is malformed
            ProviderUnavailableError: If embedding or completion fails or times out
            InternalInconsistencyError: If the provider returns the wrong vector count
        """
        self._validate_question(question, user_id)

        question_timestamp = utc_now()
        interaction = await chat_interaction_crud.create_pending(
            self.db,
            user_id=user_id,
            question=question,
            question_timestamp=question_timestamp,
        )
        interaction_id = interaction.id
        await self.db.commit()

        logger.info(
            f"{__name__}:ask - START interaction={interaction_id} user={user_id} "
            f"question={safe_log_value(question, max_length=100)}"
        )

        stage = "embedding"
        try:
            vectors = await self.embedding_provider.embed([question])
            if len(vectors) != 1:
                raise InternalInconsistencyError(
                    "Embedding provider returned an unexpected number of vectors",
                    {"expected": 1, "received": len(vectors)},
                )

            stage = "retrieval"
            scored = await self.index.search(
                vectors[0],
                top_k=self.settings.top_k,
                threshold=self.settings.similarity_threshold,
            )
            records = [item.record for item in scored]
            confidence = score_confidence(scored, self.settings.top_k)
            chapters = attribute_chapters(records)
            context = build_context(records)

            stage = "generation"
            answer = await self.completion_provider.complete(
                QA_SYSTEM_PROMPT,
                build_user_prompt(question, context),
            )

            stage = "persistence"
            response_timestamp = await chat_interaction_crud.mark_completed(
                self.db,
                interaction_id,
                question_timestamp=question_timestamp,
                response=answer,
                confidence_score=confidence,
                retrieved_chunk_count=len(scored),
                related_chapter_ids=[str(chapter.chapter_id) for chapter in chapters],
            )
            if response_timestamp is None:
                raise InternalInconsistencyError(
                    "Interaction left PENDING state before completion",
                    {"interaction_id": str(interaction_id)},
                )
            await self.db.commit()
        except asyncio.CancelledError as e:
            # Finish the FAILED transition even if the caller stops waiting
            await asyncio.shield(self._record_failure(interaction_id, question_timestamp, stage, e))
            raise
        except Exception as e:
            await self._record_failure(interaction_id, question_timestamp, stage, e)
            raise

        logger.info(
            f"{__name__}:ask - COMPLETED interaction={interaction_id} "
            f"chunks={len(scored)} confidence={confidence:.4f} chapters={len(chapters)}"
        )

        return ChatResponse(
            id=f"{RESPONSE_ID_PREFIX}{interaction_id}",
            content=answer,
            confidence_score=confidence,
            related_chapters=[
                ChapterReference(
                    chapter_id=chapter.chapter_id,
                    chapter_title=chapter.chapter_title,
                    relevance_score=chapter.relevance_score,
                )
                for chapter in chapters
            ],
            timestamp=response_timestamp,
        )

    async def history(self, user_id: str, page: int = 0, size: int = 20) -> ChatHistoryPage:
        """
        List a user's interactions, newest question first.

        Args:
            user_id: Owner of the interactions
            page: 0-based page number
            size: Page size

        Returns:
            ChatHistoryPage: Page of interactions with total count

        Raises:
            InvalidArgumentError: If page or size is out of range
        """
        if page < 0:
            raise InvalidArgumentError("Page must not be negative", field="page")
        if size <= 0:
            raise InvalidArgumentError("Page size must be positive", field="size")

        rows = await chat_interaction_crud.get_by_user(
            self.db,
            user_id,
            limit=size,
            offset=page * size,
        )
        total = await chat_interaction_crud.count_by_user(self.db, user_id)

        return ChatHistoryPage(
            items=[ChatInteractionResponse.model_validate(row) for row in rows],
            total=total,
            page=page,
            size=size,
            has_more=(page + 1) * size < total,
        )

    def _validate_question(self, question: str, user_id: str) -> None:
        if not user_id or not user_id.strip():
            raise InvalidArgumentError("User id is required", field="user_id")
        if question is None or not question.strip():
            raise InvalidArgumentError("Question cannot be empty", field="question")
        if len(question) > self.settings.max_question_length:
            raise InvalidArgumentError(
                f"Question must not exceed {self.settings.max_question_length} characters",
                field="question",
            )

    async def _record_failure(
        self,
        interaction_id: UUID,
        question_timestamp,
        stage: str,
        error: BaseException,
    ) -> None:
        if isinstance(error, AssistantError):
            message = error.message
        else:
            message = str(error) or "no detail"
        error_detail = f"{stage} failed: {type(error).__name__}: {message}"
        logger.error(f"{__name__}:ask - FAILED interaction={interaction_id} {error_detail}")

        await self.db.rollback()
        try:
            await chat_interaction_crud.mark_failed(
                self.db,
                interaction_id,
                question_timestamp=question_timestamp,
                error_detail=error_detail,
            )
            await self.db.commit()
        except Exception:
            logger.exception(
                f"{__name__}:ask - Could not record failure for interaction={interaction_id}"
            )
            await self.db.rollback()
