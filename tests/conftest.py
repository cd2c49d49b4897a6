"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory database sessions, seeded course content, deterministic
embedding and completion providers
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass

import pytest

# Bag-of-words vocabulary for KeywordEmbeddingProvider
VOCABULARY = ("array", "tree", "graph", "sort", "stack", "queue", "hash", "heap")


class KeywordEmbeddingProvider:
    """
    Deterministic embedding provider.

    Each text becomes the vector of keyword counts over VOCABULARY, so texts
    sharing keywords have high cosine similarity and unrelated texts score 0.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self.vector_for(text) for text in texts]

    @staticmethod
    def vector_for(text: str) -> list[float]:
        lowered = text.lower()
        return [float(lowered.count(word)) for word in VOCABULARY]


class RecordingCompletionProvider:
    """Completion provider returning a fixed answer and recording prompts."""

    def __init__(self, answer: str = "Generated answer") -> None:
        self.answer = answer
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        return self.answer


@dataclass
class SeededContent:
    """Ids of the seeded chapters and lessons."""

    arrays_chapter_id: uuid.UUID
    trees_chapter_id: uuid.UUID
    arrays_lesson_id: uuid.UUID
    trees_lesson_id: uuid.UUID
    empty_lesson_id: uuid.UUID


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine sharing one connection across sessions
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from dsa_assistant.boundary.db.base import Base
    import dsa_assistant.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_async_db(test_engine):
    """
    Create in-memory SQLite async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_content(test_async_db) -> SeededContent:
    """Two chapters, each with one lesson, plus a lesson without content."""
    from dsa_assistant.boundary.db.CRUD import chapter_crud, lesson_crud

    arrays = await chapter_crud.create(test_async_db, title="Arrays", order_index=1)
    trees = await chapter_crud.create(test_async_db, title="Trees", order_index=2)

    arrays_lesson = await lesson_crud.create(
        test_async_db,
        chapter_id=arrays.id,
        title="Array Basics",
        content="An array stores elements contiguously. Array indexing is constant time.",
        order_index=1,
    )
    trees_lesson = await lesson_crud.create(
        test_async_db,
        chapter_id=trees.id,
        title="Binary Trees",
        content="A binary tree node has two children. Tree traversal visits every node.",
        order_index=1,
    )
    empty_lesson = await lesson_crud.create(
        test_async_db,
        chapter_id=trees.id,
        title="Coming Soon",
        content="   ",
        order_index=2,
    )
    await test_async_db.commit()

    return SeededContent(
        arrays_chapter_id=arrays.id,
        trees_chapter_id=trees.id,
        arrays_lesson_id=arrays_lesson.id,
        trees_lesson_id=trees_lesson.id,
        empty_lesson_id=empty_lesson.id,
    )


@pytest.fixture
def embedding_provider() -> KeywordEmbeddingProvider:
    """Provide deterministic keyword embedding provider."""
    return KeywordEmbeddingProvider()


@pytest.fixture
def completion_provider() -> RecordingCompletionProvider:
    """Provide recording completion provider."""
    return RecordingCompletionProvider()


@pytest.fixture
def rag_settings():
    """RAG settings with a low threshold suited to keyword vectors."""
    from dsa_assistant.configs.rag import RAGSettings

    return RAGSettings(
        chunk_size=40,
        chunk_overlap=5,
        top_k=5,
        similarity_threshold=0.5,
        max_question_length=2000,
    )


@pytest.fixture
async def file_session_factory(tmp_path):
    """
    Session factory over a file-backed SQLite database.

    Each session gets its own connection, so concurrent tests can run
    independent transactions.

    Yields:
        async_sessionmaker: Factory producing AsyncSession instances
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from dsa_assistant.boundary.db.base import Base
    import dsa_assistant.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'assistant.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    await engine.dispose()
