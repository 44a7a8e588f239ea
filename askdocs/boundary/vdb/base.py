"""
Vector store backend abstraction.

The similarity-search collaborator the gateway talks to. Implementations
store embedded chunks and rank them by cosine similarity; they do not apply
source filtering or retrieval policy defaults.

Concrete implementations: InMemoryVectorStore, PgVectorStore.

Dependencies: askdocs.boundary.vdb.vector_schemas
System role: Vector store interface
"""

from abc import ABC, abstractmethod

from askdocs.boundary.vdb.vector_schemas import DocumentRow, RetrievedMatch, RowHeader


class VectorStoreBackend(ABC):
    """Abstract base class for similarity-search backends."""

    @abstractmethod
    async def insert(self, rows: list[DocumentRow]) -> None:
        """Persist all rows in one batch; either every row becomes visible or none does."""
        pass

    @abstractmethod
    async def similarity_search(
        self,
        vector: list[float],
        threshold: float,
        top_k: int,
    ) -> list[RetrievedMatch]:
        """Return up to top_k rows with similarity above threshold, closest first."""
        pass

    @abstractmethod
    async def list_row_headers(self) -> list[RowHeader]:
        """Return metadata and creation time of every stored row."""
        pass

    @abstractmethod
    async def delete_where_source(self, source: str) -> int:
        """Delete all rows whose metadata source equals source; return the count removed."""
        pass

    async def initialize(self) -> None:
        """Prepare backing storage. Called once at application startup."""
        return None

    async def close(self) -> None:
        """Release backend resources. Called once at application shutdown."""
        return None
