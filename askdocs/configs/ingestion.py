"""
Ingestion configuration settings.

Chunking policy and upload size ceilings for the ingestion pipeline.

Dependencies: pydantic, pydantic_settings
System role: Centralized ingestion configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from askdocs.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=500,
        description="Maximum chunk size in characters",
        gt=0,
    )
    chunk_overlap: int = Field(
        default=50,
        description="Overlap between consecutive chunks in characters",
        ge=0,
    )

    # Upload ceilings
    max_text_chars: int = Field(
        default=50_000,
        description="Character ceiling for plain text submissions",
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Byte ceiling for binary (PDF) uploads, checked before extraction",
    )
