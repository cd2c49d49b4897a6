"""
Observability module.

Provides logging configuration, correlation ID tracking and request
logging middleware.
"""

from dsa_assistant.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from dsa_assistant.observability.logger import CorrelationIdFilter, configure_logging

__all__ = [
    "configure_logging",
    "CorrelationIdFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
]
