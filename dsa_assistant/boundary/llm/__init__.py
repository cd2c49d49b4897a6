"""
Model provider adapters.

Exports:
  - EmbeddingProvider, CompletionProvider: Protocols consumed by services
  - LangChainEmbeddingProvider, LangChainCompletionProvider: Timeout-bounded adapters
  - build_embedding_provider, build_completion_provider: Google Generative AI factories
"""

from dsa_assistant.boundary.llm.providers import (
    CompletionProvider,
    EmbeddingProvider,
    LangChainCompletionProvider,
    LangChainEmbeddingProvider,
)
from dsa_assistant.boundary.llm.factory import (
    build_completion_provider,
    build_embedding_provider,
)

__all__ = [
    "EmbeddingProvider",
    "CompletionProvider",
    "LangChainEmbeddingProvider",
    "LangChainCompletionProvider",
    "build_embedding_provider",
    "build_completion_provider",
]
