"""
DSA tutor chatbot service.

Single-turn tutor restricted to Data Structures and Algorithms topics.
Answers are grounded in retrieved course chunks when any clear the
similarity threshold. Nothing is logged to the interaction table.

Dependencies: dsa_assistant.core, dsa_assistant.boundary.llm
System role: Lightweight chatbot over the retrieval pipeline
"""

import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.boundary.db.base import utc_now
from dsa_assistant.boundary.llm.providers import CompletionProvider, EmbeddingProvider
from dsa_assistant.boundary.vdb.linear_scan_index import LinearScanIndex
from dsa_assistant.configs.rag import RAGSettings
from dsa_assistant.core.context_builder import build_plain_context
from dsa_assistant.core.exceptions import InternalInconsistencyError, InvalidArgumentError
from dsa_assistant.core.prompts import TUTOR_SYSTEM_PROMPT, build_user_prompt
from dsa_assistant.core.similarity import SimilaritySearchIndex
from dsa_assistant.models.chat import ChatMessageResponse

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I encountered an error processing your message. Please try again."


class TutorChatService:
    """DSA tutor chatbot."""

    def __init__(
        self,
        db: AsyncSession,
        embedding_provider: EmbeddingProvider,
        completion_provider: CompletionProvider,
        rag_settings: RAGSettings,
        index: SimilaritySearchIndex | None = None,
    ) -> None:
        self.embedding_provider = embedding_provider
        self.completion_provider = completion_provider
        self.settings = rag_settings
        self.index = index or LinearScanIndex(db)

    async def process_message(self, message: str) -> ChatMessageResponse:
        """
        Reply to a tutor chat message.

        Any failure after validation (provider, index or database) produces an
        apology reply instead of an error.

        Args:
            message: User message

        Returns:
            ChatMessageResponse: Assistant reply

        Raises:
            InvalidArgumentError: If the message is blank or too long
        """
        if message is None or not message.strip():
            raise InvalidArgumentError("Message cannot be empty", field="message")
        if len(message) > self.settings.max_question_length:
            raise InvalidArgumentError(
                f"Message must not exceed {self.settings.max_question_length} characters",
                field="message",
            )

        try:
            vectors = await self.embedding_provider.embed([message])
            if len(vectors) != 1:
                raise InternalInconsistencyError(
                    "Embedding provider returned an unexpected number of vectors",
                    {"expected": 1, "received": len(vectors)},
                )
            scored = await self.index.search(
                vectors[0],
                top_k=self.settings.top_k,
                threshold=self.settings.similarity_threshold,
            )
            context = build_plain_context([item.record for item in scored])
            content = await self.completion_provider.complete(
                TUTOR_SYSTEM_PROMPT,
                build_user_prompt(message, context),
            )
        except Exception as e:
            logger.exception(f"{__name__}:process_message - {type(e).__name__}: {e}")
            content = FALLBACK_REPLY

        return ChatMessageResponse(
            id=f"msg_{int(time.time() * 1000)}",
            role="assistant",
            content=content,
            timestamp=utc_now(),
        )
