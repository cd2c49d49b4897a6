"""
Core retrieval data classes.

Contains pure data containers passed between pipeline stages:
- TextChunk: window of lesson text produced by the chunker
- EmbeddingRecord: stored chunk with vector and lesson/chapter lineage
- ScoredEmbedding: record paired with its similarity to a query
- ChapterAttribution: per-query chapter relevance
"""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class TextChunk:
    """Chunk of source text with its 0-based position in the document."""

    text: str
    index: int


@dataclass(frozen=True)
class EmbeddingRecord:
    """
    Detached snapshot of a stored lesson embedding.

    Scans return these instead of ORM rows so retrieval never touches
    the database session.
    """

    id: uuid.UUID
    source_document_id: uuid.UUID
    chunk_text: str
    chunk_index: int
    vector: Sequence[float] = field(repr=False)
    chapter_id: uuid.UUID | None = None
    lesson_title: str | None = None
    chapter_title: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ScoredEmbedding:
    """Embedding record with its cosine similarity to the query."""

    record: EmbeddingRecord
    score: float


@dataclass(frozen=True)
class ChapterAttribution:
    """Chapter relevance derived from retrieved chunks (score in [0, 1])."""

    chapter_id: uuid.UUID
    chapter_title: str
    relevance_score: float
