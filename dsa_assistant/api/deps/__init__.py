"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    apply_rate_limit_headers,
    enforce_rate_limit,
    get_chat_service,
    get_current_user_id,
    get_embedding_service,
    get_service_cache,
    get_tutor_chat_service,
)

__all__ = [
    "ServiceCache",
    "apply_rate_limit_headers",
    "enforce_rate_limit",
    "get_chat_service",
    "get_current_user_id",
    "get_embedding_service",
    "get_service_cache",
    "get_tutor_chat_service",
]
