"""
Shared response envelopes.

Dependencies: pydantic
System role: Error body and pagination shape used across routers
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

ItemT = TypeVar("ItemT")


class ErrorResponse(BaseModel):
    """Body of every non-2xx response produced by the exception handlers."""

    success: bool = False
    error: str = Field(description="Human readable message")
    error_type: str = Field(description="Machine readable category, e.g. rate_limited")
    details: dict | None = Field(default=None, description="Field name, provider or limits")


class PageResponse(BaseModel, Generic[ItemT]):
    """0-based page of results with the unpaged total."""

    items: list[ItemT]
    total: int = Field(ge=0)
    page: int = Field(ge=0)
    size: int = Field(gt=0)
    has_more: bool = False
