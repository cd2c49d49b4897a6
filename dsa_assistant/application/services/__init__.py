"""
Application services.

Exports:
  - ChatService: Course Q&A with durable interaction logging
  - EmbeddingService: Lesson chunking and embedding
  - TutorChatService: DSA tutor chatbot
"""

from dsa_assistant.application.services.chat_service import ChatService
from dsa_assistant.application.services.embedding_service import (
    EmbedAllResult,
    EmbeddingService,
)
from dsa_assistant.application.services.tutor_chat_service import TutorChatService

__all__ = [
    "ChatService",
    "EmbeddingService",
    "EmbedAllResult",
    "TutorChatService",
]
