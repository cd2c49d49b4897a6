"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - ChapterModel, LessonModel, LessonEmbeddingModel, ChatInteractionModel: Domain entities
  - InteractionStatus: Chat interaction lifecycle enum
  - chapter_crud, lesson_crud, embedding_crud, chat_interaction_crud: CRUD singletons

Dependencies: sqlalchemy, dsa_assistant.configs
System role: Database adapter for course content, embeddings and the Q&A log
"""

from dsa_assistant.boundary.db.base import Base, TimestampMixin, UUIDMixin
from dsa_assistant.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from dsa_assistant.boundary.db.models import (
    ChapterModel,
    ChatInteractionModel,
    InteractionStatus,
    LessonEmbeddingModel,
    LessonModel,
)
from dsa_assistant.boundary.db.CRUD import (
    BaseCRUD,
    chapter_crud,
    chat_interaction_crud,
    embedding_crud,
    lesson_crud,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ChapterModel",
    "LessonModel",
    "LessonEmbeddingModel",
    "ChatInteractionModel",
    "InteractionStatus",
    "BaseCRUD",
    "chapter_crud",
    "lesson_crud",
    "embedding_crud",
    "chat_interaction_crud",
]
