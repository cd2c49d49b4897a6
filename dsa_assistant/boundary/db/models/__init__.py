"""
Database models package.

Exports:
  - ChapterModel, LessonModel: Course content the assistant indexes
  - LessonEmbeddingModel: Stored chunk vectors
  - ChatInteractionModel, InteractionStatus: Q&A log and its lifecycle enum

Dependencies: sqlalchemy, dsa_assistant.boundary.db.base
System role: Database model definitions for domain entities
"""

from dsa_assistant.boundary.db.models.chapter_model import ChapterModel
from dsa_assistant.boundary.db.models.lesson_model import LessonModel
from dsa_assistant.boundary.db.models.embedding_model import LessonEmbeddingModel
from dsa_assistant.boundary.db.models.chat_interaction_model import (
    ChatInteractionModel,
    InteractionStatus,
)

__all__ = [
    "ChapterModel",
    "LessonModel",
    "LessonEmbeddingModel",
    "ChatInteractionModel",
    "InteractionStatus",
]
