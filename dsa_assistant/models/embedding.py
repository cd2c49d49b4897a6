"""
Embedding domain models and schemas.

Dependencies: pydantic
System role: Lesson indexing API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class EmbedContentRequest(BaseModel):
    """Request schema for (re)indexing one lesson."""

    lesson_id: uuid.UUID = Field(description="Lesson to index")
    chunk_size: int | None = Field(default=None, gt=0, description="Characters per chunk")
    chunk_overlap: int | None = Field(default=None, ge=0, description="Characters shared by adjacent chunks")

    @model_validator(mode="after")
    def overlap_below_size(self) -> "EmbedContentRequest":
        if (
            self.chunk_size is not None
            and self.chunk_overlap is not None
            and self.chunk_overlap >= self.chunk_size
        ):
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self


class EmbedResponse(BaseModel):
    """Result of indexing one lesson."""

    lesson_id: uuid.UUID
    chunks_created: int
    status: str = "SUCCESS"
    timestamp: datetime


class EmbedAllResponse(BaseModel):
    """Result of indexing every lesson."""

    lessons_processed: int
    lessons_failed: int
    chunks_created: int
    timestamp: datetime
