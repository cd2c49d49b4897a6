"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: dsa_assistant.configs, dsa_assistant.application, dsa_assistant.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Header, Response
from sqlalchemy.ext.asyncio import AsyncSession

from dsa_assistant.application.services import (
    ChatService,
    EmbeddingService,
    TutorChatService,
)
from dsa_assistant.boundary.db import get_async_db
from dsa_assistant.configs import Settings, get_settings
from dsa_assistant.core.exceptions import InvalidArgumentError, RateLimitExceededError
from dsa_assistant.core.locks import KeyedLockRegistry
from dsa_assistant.core.rate_limiter import SlidingWindowRateLimiter
from dsa_assistant.models.rate_limit import RateLimitInfo

USER_ID_HEADER = "X-User-Id"


class ServiceCache:
    """Container for process-wide service instances."""

    def __init__(
        self,
        settings: Settings | None = None,
        embedding_provider=None,
        completion_provider=None,
    ):
        """
        Initialize cache.

        Args:
            settings: Settings to use instead of get_settings()
            embedding_provider: Pre-built embedding provider
            completion_provider: Pre-built completion provider
        """
        self._settings = settings
        self._rate_limiter = None
        self._embedding_provider = embedding_provider
        self._completion_provider = completion_provider
        self._document_locks = None

    @property
    def settings(self) -> Settings:
        """Get settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def rate_limiter(self) -> SlidingWindowRateLimiter:
        """Get cached rate limiter."""
        if self._rate_limiter is None:
            self._rate_limiter = SlidingWindowRateLimiter(self.settings.rate_limit)
        return self._rate_limiter

    @property
    def embedding_provider(self):
        """Get cached embedding provider."""
        if self._embedding_provider is None:
            from dsa_assistant.boundary.llm.factory import build_embedding_provider
            self._embedding_provider = build_embedding_provider(self.settings.llm)
        return self._embedding_provider

    @property
    def completion_provider(self):
        """Get cached completion provider."""
        if self._completion_provider is None:
            from dsa_assistant.boundary.llm.factory import build_completion_provider
            self._completion_provider = build_completion_provider(self.settings.llm)
        return self._completion_provider

    @property
    def document_locks(self) -> KeyedLockRegistry:
        """Get per-lesson lock registry."""
        if self._document_locks is None:
            self._document_locks = KeyedLockRegistry()
        return self._document_locks

    def clear(self) -> None:
        """Clear all cached instances."""
        self._rate_limiter = None
        self._embedding_provider = None
        self._completion_provider = None
        self._document_locks = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_current_user_id(
    user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    """
    Resolve the calling user from the X-User-Id header.

    Authentication happens upstream; this service trusts the header.

    Raises:
        InvalidArgumentError: If the header is missing or blank
    """
    if user_id is None or not user_id.strip():
        raise InvalidArgumentError(f"{USER_ID_HEADER} header is required", field=USER_ID_HEADER)
    return user_id.strip()


def apply_rate_limit_headers(response: Response, info: RateLimitInfo) -> None:
    """Render a rate limit decision as X-RateLimit-* headers."""
    response.headers["X-RateLimit-Limit"] = str(info.limit)
    response.headers["X-RateLimit-Remaining"] = str(info.remaining_requests)
    response.headers["X-RateLimit-Reset"] = str(info.reset_time_seconds)


def enforce_rate_limit(
    response: Response,
    user_id: str = Depends(get_current_user_id),
    cache: ServiceCache = Depends(get_service_cache),
) -> RateLimitInfo:
    """
    Admit or reject the request under the user's sliding window.

    Args:
        response: Outgoing response (receives rate limit headers)
        user_id: Calling user
        cache: Service cache holding the limiter

    Returns:
        RateLimitInfo: Decision for an admitted request

    Raises:
        RateLimitExceededError: If the user's window is full
    """
    info = cache.rate_limiter.check_and_record(user_id)
    if not info.allowed:
        raise RateLimitExceededError(
            retry_after_seconds=info.reset_time_seconds,
            limit=info.limit,
        )
    apply_rate_limit_headers(response, info)
    return info


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Service cache with providers

    Returns:
        ChatService: Q&A service
    """
    return ChatService(
        db=db,
        embedding_provider=cache.embedding_provider,
        completion_provider=cache.completion_provider,
        rag_settings=cache.settings.rag,
    )


def get_embedding_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> EmbeddingService:
    """
    Get embedding service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Service cache with providers and lesson locks

    Returns:
        EmbeddingService: Lesson indexing service
    """
    return EmbeddingService(
        db=db,
        embedding_provider=cache.embedding_provider,
        locks=cache.document_locks,
        rag_settings=cache.settings.rag,
    )


def get_tutor_chat_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> TutorChatService:
    """Get DSA tutor chatbot service instance."""
    return TutorChatService(
        db=db,
        embedding_provider=cache.embedding_provider,
        completion_provider=cache.completion_provider,
        rag_settings=cache.settings.rag,
    )
