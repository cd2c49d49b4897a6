"""
Language model provider settings.

Model identifiers, sampling parameters and call timeouts for the
embedding and chat completion providers.

Dependencies: pydantic, pydantic_settings
System role: External model provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Embedding and completion provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Embedding model identifier",
    )
    chat_model: str = Field(
        default="gemini-2.0-flash",
        description="Chat completion model identifier",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=3500, ge=1, le=4096, description="Maximum response tokens")
    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Upper bound for a single provider call",
    )
    google_api_key: str | None = Field(
        default=None,
        description="API key for Google Generative AI (falls back to GOOGLE_API_KEY)",
    )

    @property
    def masked_api_key(self) -> str:
        """Return the API key with everything but the first and last 4 chars hidden."""
        key = self.google_api_key
        if not key or len(key) < 12:
            return "****"
        return f"{key[:4]}...{key[-4:]}"
