"""
Vector store factory for selecting between in-memory (dev) and pgvector (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: askdocs.boundary.vdb, askdocs.configs
System role: Vector store instantiation and selection
"""

import logging

from askdocs.boundary.vdb.base import VectorStoreBackend
from askdocs.configs import get_settings

logger = logging.getLogger(__name__)


def get_vector_store() -> VectorStoreBackend:
    """
    Factory function to get vector store based on environment configuration.

    Returns:
        VectorStoreBackend: InMemoryVectorStore or PgVectorStore

    Raises:
        ValueError: If VECTOR_STORE_STORE_TYPE is invalid
    """
    settings = get_settings()
    store_type = settings.vector_store.store_type.lower()

    if store_type == "memory":
        from askdocs.boundary.vdb.memory_store import InMemoryVectorStore

        logger.info(
            f"{__name__}:get_vector_store - Creating in-memory vector store (local dev mode)"
        )
        return InMemoryVectorStore()

    elif store_type == "pgvector":
        from askdocs.boundary.db.connection import get_async_session_factory
        from askdocs.boundary.vdb.pgvector_store import PgVectorStore

        logger.info(f"{__name__}:get_vector_store - Creating pgvector store (production mode)")
        return PgVectorStore(session_factory=get_async_session_factory())

    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
            f"Must be 'memory' (dev) or 'pgvector' (production)."
        )
