"""
Document service for listing and deleting stored documents.

Dependencies: askdocs.boundary.vdb
System role: Document management orchestration
"""

import logging

from askdocs.boundary.vdb.vector_store_client import VectorStoreClient
from askdocs.core.exceptions import InvalidParameterError
from askdocs.models.document import DocumentSummary

logger = logging.getLogger(__name__)


class DocumentService:
    """Per-source document management over the vector store gateway."""

    def __init__(self, vector_store: VectorStoreClient) -> None:
        self.vector_store = vector_store

    async def list_sources(self) -> list[DocumentSummary]:
        """List every stored source with its chunk count and creation time."""
        return await self.vector_store.list_sources()

    async def delete_source(self, source: str | None) -> int:
        """
        Delete all chunks of a source.

        Args:
            source: Source to delete

        Returns:
            int: Number of chunks removed (0 when the source is unknown)

        Raises:
            InvalidParameterError: When source is missing
            StoreError: When the delete fails
        """
        if not source or not isinstance(source, str):
            raise InvalidParameterError("Missing source to delete", field="source")

        deleted = await self.vector_store.delete_by_source(source)
        logger.info(
            f"{__name__}:delete_source - Deleted source",
            extra={"source": source, "deleted": deleted},
        )
        return deleted
