"""
Answer confidence scoring.

Dependencies: dsa_assistant.core.schemas
System role: Reduces retrieval results to a single [0, 1] trust value
"""

from collections.abc import Sequence

from dsa_assistant.core.exceptions import InvalidArgumentError
from dsa_assistant.core.schemas import ScoredEmbedding

SIMILARITY_WEIGHT = 0.7
COVERAGE_WEIGHT = 0.3


def score_confidence(scored: Sequence[ScoredEmbedding], top_k: int) -> float:
    """
    Combine retrieval strength and coverage into a confidence value.

    confidence = 0.7 * mean(similarity) + 0.3 * min(1, len(scored) / top_k),
    clamped to [0, 1].

    Args:
        scored: Retrieved chunks with similarity scores
        top_k: Retrieval depth the results were requested with

    Returns:
        float: Confidence in [0, 1]; 0.0 when nothing was retrieved

    Raises:
        InvalidArgumentError: When top_k is not positive
    """
    if top_k <= 0:
        raise InvalidArgumentError("top_k must be positive", field="top_k")
    if not scored:
        return 0.0

    avg_similarity = sum(item.score for item in scored) / len(scored)
    chunk_ratio = min(1.0, len(scored) / top_k)
    confidence = SIMILARITY_WEIGHT * avg_similarity + COVERAGE_WEIGHT * chunk_ratio
    return min(1.0, max(0.0, confidence))
