"""
Retrieval configuration settings.

Chunking window, retrieval depth and similarity cut-off used by the
question answering pipeline.

Dependencies: pydantic, pydantic_settings
System role: RAG pipeline tuning parameters
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RAGSettings(BaseSettings):
    """Chunking and retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAG_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=500, gt=0, description="Characters per chunk")
    chunk_overlap: int = Field(default=50, ge=0, description="Characters shared by adjacent chunks")
    top_k: int = Field(default=5, gt=0, description="Number of top results to retrieve")
    similarity_threshold: float = Field(
        default=0.7,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity for a chunk to be retrieved",
    )
    max_question_length: int = Field(
        default=2000,
        gt=0,
        description="Maximum accepted question length in characters",
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "RAGSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("RAG_CHUNK_OVERLAP must be less than RAG_CHUNK_SIZE")
        return self
