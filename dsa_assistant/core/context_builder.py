"""
Context assembly and chapter attribution.

Renders retrieved chunks into the labelled context block placed in the
prompt, and ranks the chapters the chunks came from.

Dependencies: dsa_assistant.core.schemas
System role: Bridge between retrieval results and prompt/response
"""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass

from dsa_assistant.core.schemas import ChapterAttribution, EmbeddingRecord

NO_CONTEXT_MESSAGE = "No relevant context found in the course materials."
UNKNOWN_CHAPTER = "Unknown Chapter"
UNKNOWN_LESSON = "Unknown"

RANK_DECAY = 0.1
MIN_RANK_WEIGHT = 0.1


def build_context(records: Sequence[EmbeddingRecord]) -> str:
    """
    Render retrieved chunks as labelled source blocks.

    Args:
        records: Retrieved chunks in rank order

    Returns:
        str: Blocks of the form "[Source N - Chapter > Lesson]" followed by the
        chunk text, or NO_CONTEXT_MESSAGE when nothing was retrieved
    """
    if not records:
        return NO_CONTEXT_MESSAGE

    parts = []
    for rank, record in enumerate(records, start=1):
        chapter_title = record.chapter_title or UNKNOWN_CHAPTER
        lesson_title = record.lesson_title or UNKNOWN_LESSON
        parts.append(f"[Source {rank} - {chapter_title} > {lesson_title}]\n{record.chunk_text}\n\n")
    return "".join(parts).strip()


def build_plain_context(records: Sequence[EmbeddingRecord]) -> str:
    """Join chunk texts without source labels (tutor chatbot context)."""
    if not records:
        return NO_CONTEXT_MESSAGE
    return "\n\n".join(record.chunk_text for record in records)


@dataclass
class _ChapterTally:
    chapter_id: uuid.UUID
    title: str
    count: int = 0
    total_weight: float = 0.0


def attribute_chapters(records: Sequence[EmbeddingRecord]) -> list[ChapterAttribution]:
    """
    Rank the chapters that own the retrieved chunks.

    The chunk at rank i adds max(0.1, 1 - 0.1 * i) to its chapter. Totals are
    normalized by the largest total, so the best chapter scores 1.0.
    Chunks without a chapter are ignored.

    Args:
        records: Retrieved chunks in rank order

    Returns:
        list[ChapterAttribution]: Chapters by relevance, descending; chapters
        with equal relevance keep first-seen order
    """
    tallies: dict[uuid.UUID, _ChapterTally] = {}

    for rank, record in enumerate(records):
        if record.chapter_id is None:
            continue
        tally = tallies.get(record.chapter_id)
        if tally is None:
            tally = _ChapterTally(
                chapter_id=record.chapter_id,
                title=record.chapter_title or UNKNOWN_CHAPTER,
            )
            tallies[record.chapter_id] = tally
        tally.total_weight += max(MIN_RANK_WEIGHT, 1.0 - rank * RANK_DECAY)
        tally.count += 1

    if not tallies:
        return []

    max_weight = max(tally.total_weight for tally in tallies.values())
    attributions = [
        ChapterAttribution(
            chapter_id=tally.chapter_id,
            chapter_title=tally.title,
            relevance_score=min(1.0, tally.total_weight / max_weight),
        )
        for tally in tallies.values()
    ]
    return sorted(attributions, key=lambda item: item.relevance_score, reverse=True)
