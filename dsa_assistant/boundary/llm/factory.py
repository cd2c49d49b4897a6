"""
Provider factory.

Builds the Google Generative AI embedding and chat models from settings
and wraps them in timeout-bounded providers.

Dependencies: langchain_google_genai, python-dotenv, dsa_assistant.configs
System role: Default provider construction for the service cache
"""

import logging

from dotenv import load_dotenv
from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

from dsa_assistant.boundary.llm.providers import (
    LangChainCompletionProvider,
    LangChainEmbeddingProvider,
)
from dsa_assistant.configs.llm import LLMSettings

logger = logging.getLogger(__name__)

# GOOGLE_API_KEY from .env must reach os.environ for the Google clients
load_dotenv()


def _api_key_kwargs(settings: LLMSettings) -> dict:
    # Without an explicit key the client reads GOOGLE_API_KEY itself
    if settings.google_api_key:
        return {"google_api_key": settings.google_api_key}
    return {}


def build_embedding_provider(settings: LLMSettings) -> LangChainEmbeddingProvider:
    """
    Build the embedding provider.

    Args:
        settings: LLM settings

    Returns:
        LangChainEmbeddingProvider: Provider over GoogleGenerativeAIEmbeddings
    """
    embeddings = GoogleGenerativeAIEmbeddings(
        model=settings.embedding_model,
        **_api_key_kwargs(settings),
    )
    logger.info(
        f"{__name__}:build_embedding_provider - model={settings.embedding_model}, "
        f"api_key={settings.masked_api_key}"
    )
    return LangChainEmbeddingProvider(embeddings, settings.request_timeout_seconds)


def build_completion_provider(settings: LLMSettings) -> LangChainCompletionProvider:
    """
    Build the chat completion provider.

    Args:
        settings: LLM settings

    Returns:
        LangChainCompletionProvider: Provider over ChatGoogleGenerativeAI
    """
    model = ChatGoogleGenerativeAI(
        model=settings.chat_model,
        temperature=settings.temperature,
        max_output_tokens=settings.max_tokens,
        **_api_key_kwargs(settings),
    )
    logger.info(
        f"{__name__}:build_completion_provider - model={settings.chat_model}, "
        f"temperature={settings.temperature}, max_tokens={settings.max_tokens}"
    )
    return LangChainCompletionProvider(model, settings.request_timeout_seconds)
