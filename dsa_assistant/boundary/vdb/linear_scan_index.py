"""
Linear scan similarity index.

Scores every stored embedding against the query vector. Cost grows
linearly with the number of stored chunks; there is no ANN structure.

Dependencies: sqlalchemy, dsa_assistant.boundary.db.CRUD, dsa_assistant.core.similarity
System role: Default SimilaritySearchIndex for the Q&A pipeline
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.boundary.db.CRUD.embedding_crud import embedding_crud
from dsa_assistant.core.schemas import ScoredEmbedding
from dsa_assistant.core.similarity import retrieve

logger = logging.getLogger(__name__)


class LinearScanIndex:
    """SimilaritySearchIndex over embedding_crud.scan_all."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def search(
        self,
        query_vector: Sequence[float],
        top_k: int,
        threshold: float,
    ) -> list[ScoredEmbedding]:
        records = await embedding_crud.scan_all(self._session)
        results = retrieve(query_vector, records, top_k, threshold)
        logger.info(
            f"{__name__}:search - Scanned {len(records)} embeddings, "
            f"{len(results)} above threshold {threshold}"
        )
        return results
