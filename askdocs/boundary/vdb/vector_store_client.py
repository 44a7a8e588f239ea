"""
Vector store gateway.

Owns persistence of embedded chunks and applies the retrieval policy on
top of a similarity-search backend:
- at most top_k matches, each with similarity strictly above the threshold
- matches ordered by descending similarity
- optional source filter applied after ranking, over the top_k candidates

Backend failures are surfaced as StoreError and never retried here.

Dependencies: askdocs.boundary.vdb, askdocs.models
System role: Retrieval client shared by ingestion and answering
"""

import logging

from askdocs.boundary.vdb.base import VectorStoreBackend
from askdocs.boundary.vdb.vector_schemas import DocumentRow, RetrievedMatch
from askdocs.core.exceptions import InvalidParameterError, StoreError
from askdocs.models.document import DocumentSummary

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.7
DEFAULT_TOP_K = 3


class VectorStoreClient:
    """Gateway over a similarity-search backend."""

    def __init__(
        self,
        backend: VectorStoreBackend,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        top_k: int = DEFAULT_TOP_K,
    ) -> None:
        """
        Initialize gateway with backend and default retrieval policy.

        Args:
            backend: Similarity-search backend
            similarity_threshold: Default minimum similarity (exclusive)
            top_k: Default maximum number of matches
        """
        self._backend = backend
        self.similarity_threshold = similarity_threshold
        self.top_k = top_k

    @property
    def backend(self) -> VectorStoreBackend:
        """Underlying similarity-search backend."""
        return self._backend

    async def insert_all(self, rows: list[DocumentRow]) -> int:
        """
        Insert rows as one batch.

        Args:
            rows: Embedded chunks to persist

        Returns:
            int: Number of rows inserted

        Raises:
            StoreError: When the backend rejects the batch
        """
        if not rows:
            return 0

        try:
            await self._backend.insert(rows)
        except Exception as e:
            logger.exception(
                "Failed to insert rows into vector store",
                extra={"chunk_count": len(rows), "error": str(e)},
            )
            raise StoreError(
                f"Failed to insert rows: {e}",
                operation="insert",
                details={"chunk_count": len(rows)},
            ) from e

        return len(rows)

    async def query(
        self,
        vector: list[float],
        similarity_threshold: float | None = None,
        top_k: int | None = None,
        source_filter: str | None = None,
    ) -> list[RetrievedMatch]:
        """
        Retrieve the chunks most similar to a vector.

        Args:
            vector: Query embedding
            similarity_threshold: Minimum similarity, exclusive (defaults to gateway policy)
            top_k: Maximum matches (defaults to gateway policy)
            source_filter: Keep only candidates whose metadata source equals this value

        Returns:
            list[RetrievedMatch]: Matches, closest first; may be empty

        Raises:
            InvalidParameterError: When threshold or top_k is out of range
            StoreError: When the backend query fails
        """
        threshold = self.similarity_threshold if similarity_threshold is None else similarity_threshold
        k = self.top_k if top_k is None else top_k

        if not 0.0 <= threshold <= 1.0:
            raise InvalidParameterError(
                "similarity_threshold must be between 0 and 1",
                field="similarity_threshold",
            )
        if k < 1:
            raise InvalidParameterError("top_k must be at least 1", field="top_k")

        try:
            candidates = await self._backend.similarity_search(vector, threshold, k)
        except Exception as e:
            logger.exception(
                "Vector store similarity search failed",
                extra={"top_k": k, "threshold": threshold, "error": str(e)},
            )
            raise StoreError(f"Similarity search failed: {e}", operation="query") from e

        ranked = sorted(
            (match for match in candidates if match.similarity > threshold),
            key=lambda match: match.similarity,
            reverse=True,
        )[:k]

        if source_filter is not None:
            ranked = [
                match for match in ranked
                if match.metadata.get("source") == source_filter
            ]

        logger.info(
            f"{__name__}:query - Retrieved {len(ranked)} matches",
            extra={
                "candidate_count": len(candidates),
                "match_count": len(ranked),
                "source_filter": source_filter,
            },
        )
        return ranked

    async def list_sources(self) -> list[DocumentSummary]:
        """
        Summarize stored documents by source.

        Returns:
            list[DocumentSummary]: One entry per source in scan order, with row
                count and earliest creation time

        Raises:
            StoreError: When the backend scan fails
        """
        try:
            headers = await self._backend.list_row_headers()
        except Exception as e:
            logger.exception("Vector store listing failed", extra={"error": str(e)})
            raise StoreError(f"Failed to list documents: {e}", operation="list") from e

        summaries: dict[str, DocumentSummary] = {}
        for header in headers:
            source = header.metadata.get("source")
            if not source:
                continue

            summary = summaries.get(source)
            if summary is None:
                summaries[source] = DocumentSummary(
                    source=source,
                    chunk_count=1,
                    created_at=header.created_at,
                )
                continue

            summary.chunk_count += 1
            if header.created_at < summary.created_at:
                summary.created_at = header.created_at

        return list(summaries.values())

    async def delete_by_source(self, source: str) -> int:
        """
        Delete every row of a source. Deleting an unknown source is a no-op.

        Args:
            source: Source to delete

        Returns:
            int: Number of rows removed

        Raises:
            InvalidParameterError: When source is empty
            StoreError: When the backend delete fails
        """
        if not source:
            raise InvalidParameterError("Missing source to delete", field="source")

        try:
            deleted = await self._backend.delete_where_source(source)
        except Exception as e:
            logger.exception(
                "Vector store delete failed",
                extra={"source": source, "error": str(e)},
            )
            raise StoreError(
                f"Failed to delete document: {e}",
                operation="delete",
                details={"source": source},
            ) from e

        logger.info(
            f"{__name__}:delete_by_source - Deleted {deleted} rows",
            extra={"source": source, "deleted": deleted},
        )
        return deleted
