"""Course Q&A API endpoints.

Routes:
- POST /chat/ask - Answer a question from course materials (rate limited)
- POST /chat/embed-content - (Re)index one lesson
- POST /chat/embed-all - (Re)index every lesson
- GET /chat/history - Caller's interactions, newest first
- GET /chat/rate-limit - Caller's current rate limit status

Dependencies: dsa_assistant.application.services
System role: Q&A and indexing HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query, Response

from dsa_assistant.api.deps import (
    ServiceCache,
    apply_rate_limit_headers,
    enforce_rate_limit,
    get_chat_service,
    get_current_user_id,
    get_embedding_service,
    get_service_cache,
)
from dsa_assistant.application.services import ChatService, EmbeddingService
from dsa_assistant.boundary.db.base import utc_now
from dsa_assistant.models.chat import ChatHistoryPage, ChatRequest, ChatResponse
from dsa_assistant.models.embedding import (
    EmbedAllResponse,
    EmbedContentRequest,
    EmbedResponse,
)
from dsa_assistant.models.rate_limit import RateLimitInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post(
    "/ask",
    response_model=ChatResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def ask(
    request: ChatRequest,
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a question using retrieved course content.

    Args:
        request: ChatRequest with the question
        user_id: Caller from X-User-Id
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Answer with confidence and related chapters

    Raises:
        InvalidArgumentError (400), RateLimitExceededError (429),
        ProviderUnavailableError (503), InternalInconsistencyError (500)
    """
    logger.info(f"{__name__}:ask - user={user_id}")
    return await chat_service.ask(request.message, user_id)


@router.post("/embed-content", response_model=EmbedResponse)
async def embed_content(
    request: EmbedContentRequest,
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> EmbedResponse:
    """Chunk and embed one lesson, replacing its previous embeddings."""
    chunks_created = await embedding_service.embed_document(
        request.lesson_id,
        chunk_size=request.chunk_size,
        chunk_overlap=request.chunk_overlap,
    )
    return EmbedResponse(
        lesson_id=request.lesson_id,
        chunks_created=chunks_created,
        timestamp=utc_now(),
    )


@router.post("/embed-all", response_model=EmbedAllResponse)
async def embed_all(
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> EmbedAllResponse:
    """Embed every lesson; failures are skipped and counted."""
    result = await embedding_service.embed_all_lessons()
    return EmbedAllResponse(
        lessons_processed=result.lessons_processed,
        lessons_failed=result.lessons_failed,
        chunks_created=result.chunks_created,
        timestamp=utc_now(),
    )


@router.get("/history", response_model=ChatHistoryPage)
async def history(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryPage:
    """Return the caller's interactions, newest question first."""
    return await chat_service.history(user_id, page=page, size=size)


@router.get("/rate-limit", response_model=RateLimitInfo)
async def rate_limit_status(
    response: Response,
    user_id: str = Depends(get_current_user_id),
    cache: ServiceCache = Depends(get_service_cache),
) -> RateLimitInfo:
    """Report the caller's remaining quota without consuming it."""
    info = cache.rate_limiter.get_status(user_id)
    apply_rate_limit_headers(response, info)
    return info
