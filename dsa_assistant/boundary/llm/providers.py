"""
Embedding and completion provider adapters.

Wrap LangChain embedding and chat models behind the narrow interfaces the
services consume. Every call is bounded by a timeout; any failure is
re-raised as ProviderError. A vector count that does not match the input
is an InternalInconsistencyError.

Dependencies: langchain_core, dsa_assistant.core.exceptions
System role: External model provider boundary
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from dsa_assistant.core.exceptions import InternalInconsistencyError, ProviderError

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    """Turns texts into vectors, one per input, same order."""

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        ...


class CompletionProvider(Protocol):
    """Generates an answer from a system and a user prompt."""

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        ...


class LangChainEmbeddingProvider:
    """EmbeddingProvider backed by a LangChain Embeddings model."""

    def __init__(self, embeddings: Embeddings, timeout_seconds: float) -> None:
        """
        Initialize provider.

        Args:
            embeddings: LangChain embeddings model
            timeout_seconds: Upper bound for one embed call
        """
        self._embeddings = embeddings
        self._timeout = timeout_seconds

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed texts.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per text

        Raises:
            ProviderError: On timeout or any model failure
            InternalInconsistencyError: If the model returns a different number of vectors
        """
        if not texts:
            return []

        try:
            vectors = await asyncio.wait_for(
                self._embeddings.aembed_documents(list(texts)),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"{__name__}:embed - Embedding call timed out after {self._timeout}s "
                f"({len(texts)} texts)"
            )
            raise ProviderError(
                f"Embedding provider timed out after {self._timeout}s",
                provider="embedding",
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:embed - {type(e).__name__}: {e}")
            raise ProviderError(
                f"Embedding provider failed: {e}",
                provider="embedding",
                details={"error_type": type(e).__name__},
            ) from e

        if len(vectors) != len(texts):
            logger.error(
                f"{__name__}:embed - Expected {len(texts)} vectors, got {len(vectors)}"
            )
            raise InternalInconsistencyError(
                f"Embedding provider returned {len(vectors)} vectors for {len(texts)} texts",
                {"provider": "embedding", "expected": len(texts), "received": len(vectors)},
            )

        logger.debug(f"{__name__}:embed - Embedded {len(texts)} texts")
        return [list(vector) for vector in vectors]


class LangChainCompletionProvider:
    """CompletionProvider backed by a LangChain chat model."""

    def __init__(self, model: BaseChatModel, timeout_seconds: float) -> None:
        """
        Initialize provider.

        Args:
            model: LangChain chat model
            timeout_seconds: Upper bound for one completion call
        """
        self._model = model
        self._timeout = timeout_seconds

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Generate a completion.

        Args:
            system_prompt: System instructions
            user_prompt: User message including retrieved context

        Returns:
            str: Generated text

        Raises:
            ProviderError: On timeout or any model failure
        """
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        try:
            response = await asyncio.wait_for(
                self._model.ainvoke(messages),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:complete - Completion call timed out after {self._timeout}s")
            raise ProviderError(
                f"Completion provider timed out after {self._timeout}s",
                provider="completion",
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:complete - {type(e).__name__}: {e}")
            raise ProviderError(
                f"Completion provider failed: {e}",
                provider="completion",
                details={"error_type": type(e).__name__},
            ) from e

        return _message_text(response.content)


def _message_text(content: str | list) -> str:
    # Some chat models return a list of content parts instead of a string
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)
