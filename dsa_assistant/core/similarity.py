"""
Exhaustive cosine similarity search.

Scores every stored vector against a query vector, drops results under the
similarity threshold and ranks the rest. No index structure is kept; cost is
linear in the number of stored chunks.

Dependencies: dsa_assistant.core.schemas
System role: Retrieval stage of the Q&A pipeline
"""

import math
from collections.abc import Iterable, Sequence
from typing import Protocol

from dsa_assistant.core.exceptions import InvalidArgumentError
from dsa_assistant.core.schemas import EmbeddingRecord, ScoredEmbedding


def cosine_similarity(a: Sequence[float] | None, b: Sequence[float] | None) -> float:
    """
    Compute cosine similarity between two vectors.

    Degenerate input (missing, empty, mismatched length, zero norm) scores 0.0.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: dot(a, b) / (|a| * |b|), or 0.0 for degenerate input
    """
    if not a or not b or len(a) != len(b):
        return 0.0

    dot_product = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot_product += x * y
        norm_a += x * x
        norm_b += y * y

    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return dot_product / (math.sqrt(norm_a) * math.sqrt(norm_b))


def retrieve(
    query_vector: Sequence[float],
    records: Iterable[EmbeddingRecord],
    top_k: int,
    threshold: float,
) -> list[ScoredEmbedding]:
    """
    Rank records by similarity to the query.

    Args:
        query_vector: Embedded question
        records: Candidate records (all stored chunks)
        top_k: Maximum number of results
        threshold: Minimum similarity for a record to be kept

    Returns:
        list[ScoredEmbedding]: At most top_k results, best first. Equal scores
        keep their input order.

    Raises:
        InvalidArgumentError: When top_k is not positive
    """
    if top_k <= 0:
        raise InvalidArgumentError("top_k must be positive", field="top_k")

    scored = [
        ScoredEmbedding(record=record, score=cosine_similarity(query_vector, record.vector))
        for record in records
    ]
    kept = [item for item in scored if item.score >= threshold]
    # sorted() is stable, so ties stay in scan order
    kept = sorted(kept, key=lambda item: item.score, reverse=True)
    return kept[:top_k]


class SimilaritySearchIndex(Protocol):
    """Search backend used by the Q&A pipeline."""

    async def search(
        self,
        query_vector: Sequence[float],
        top_k: int,
        threshold: float,
    ) -> list[ScoredEmbedding]:
        """Return the top_k stored chunks scoring at least threshold, best first."""
        ...
