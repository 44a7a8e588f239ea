"""
Model provider configuration settings.

Embedding and generation model selection, the embedding retry policy,
the generation deadline and the answer stream protocol.

Dependencies: pydantic, pydantic_settings
System role: Model provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from askdocs.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Embedding and chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="google",
        description="Model provider: 'google' (Gemini) or 'bedrock' (Amazon Bedrock)",
    )
    region: str = Field(default="us-east-1", description="AWS region for Bedrock")

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID",
    )
    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Chat model ID used for answer generation",
    )
    temperature: float = Field(default=0.0, description="Generation temperature")
    max_tokens: int = Field(default=2048, description="Maximum tokens per generated answer")

    # Embedding retry policy
    embedding_max_attempts: int = Field(
        default=3,
        description="Total embedding attempts before giving up",
        ge=1,
    )
    embedding_base_delay_seconds: float = Field(
        default=0.25,
        description="Delay before the second attempt; later delays grow by the backoff factor",
        ge=0.0,
    )
    embedding_backoff_factor: float = Field(
        default=2.0,
        description="Multiplier applied to the delay after each failed attempt",
        ge=1.0,
    )

    generation_timeout_seconds: float = Field(
        default=120.0,
        description="Deadline for a whole generation stream",
        gt=0.0,
    )
    answer_protocol: str = Field(
        default="marker",
        description="Answer stream protocol: 'marker' (sentinel + JSON) or 'framed'",
    )
