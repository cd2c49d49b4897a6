"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, dsa_assistant.configs
System role: Database schema initialization

Usage:
    python -m dsa_assistant.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from dsa_assistant.boundary.db.base import Base
from dsa_assistant.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from dsa_assistant.boundary.db.models.chapter_model import ChapterModel  # noqa: F401
from dsa_assistant.boundary.db.models.lesson_model import LessonModel  # noqa: F401
from dsa_assistant.boundary.db.models.embedding_model import LessonEmbeddingModel  # noqa: F401
from dsa_assistant.boundary.db.models.chat_interaction_model import ChatInteractionModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Engine to use (defaults to the configured one)

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - All tables created successfully")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Args:
        engine: Engine to use (defaults to the configured one)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - All tables dropped successfully")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_all_tables())
