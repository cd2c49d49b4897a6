"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from dsa_assistant.boundary.db.CRUD import embedding_crud, chat_interaction_crud

    records = await embedding_crud.scan_all(db)
"""

from dsa_assistant.boundary.db.CRUD.base_crud import BaseCRUD
from dsa_assistant.boundary.db.CRUD.content_crud import (
    ChapterCRUD,
    LessonCRUD,
    chapter_crud,
    lesson_crud,
)
from dsa_assistant.boundary.db.CRUD.embedding_crud import EmbeddingCRUD, embedding_crud
from dsa_assistant.boundary.db.CRUD.chat_interaction_crud import (
    ChatInteractionCRUD,
    chat_interaction_crud,
)

__all__ = [
    "BaseCRUD",
    "ChapterCRUD",
    "chapter_crud",
    "LessonCRUD",
    "lesson_crud",
    "EmbeddingCRUD",
    "embedding_crud",
    "ChatInteractionCRUD",
    "chat_interaction_crud",
]
