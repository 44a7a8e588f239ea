"""
Application settings.

Groups the per-concern settings under one object and caches it for the
process. Tests call get_settings.cache_clear() after changing environment.

Dependencies: askdocs.configs
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from askdocs.configs.base import BaseSettings
from askdocs.configs.database import DatabaseSettings
from askdocs.configs.ingestion import IngestionSettings
from askdocs.configs.llm import LLMSettings
from askdocs.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """All settings groups; each group reads its own env prefix."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings, reading the environment on first call."""
    return Settings()
