"""
Vector store configuration settings.

Selects the similarity-search backend and holds the retrieval policy
(similarity threshold and top-k) used by the answering pipeline.

Dependencies: pydantic, pydantic_settings
System role: Vector store configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from askdocs.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for dev, pgvector for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="memory",
        description="Vector store type: 'memory' for local dev, 'pgvector' for production",
    )
    table_name: str = Field(default="documents", description="Table holding embedded chunks")
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (must match the embedding model)",
        gt=0,
    )

    top_k: int = Field(default=3, description="Number of top results to retrieve", ge=1)
    similarity_threshold: float = Field(
        default=0.7,
        description="Minimum similarity score a match must exceed (0.0-1.0)",
        ge=0.0,
        le=1.0,
    )
