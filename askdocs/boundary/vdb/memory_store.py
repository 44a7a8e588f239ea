"""
In-memory vector store for development.

Keeps rows in process memory and ranks them by brute-force cosine
similarity with numpy. Used for local runs and tests without PostgreSQL.

Dependencies: numpy
System role: Development vector store (local testing only)
"""

import logging
import uuid
from datetime import datetime, timezone

import numpy as np

from askdocs.boundary.vdb.base import VectorStoreBackend
from askdocs.boundary.vdb.vector_schemas import (
    DocumentRow,
    RetrievedMatch,
    RowHeader,
    StoredDocument,
)

logger = logging.getLogger(__name__)


class InMemoryVectorStore(VectorStoreBackend):
    """
    Process-local vector store.

    All rows must share one embedding dimension, fixed by the first insert.
    """

    def __init__(self) -> None:
        self._rows: list[StoredDocument] = []

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> list[StoredDocument]:
        """Snapshot of stored rows in insertion order."""
        return list(self._rows)

    def _dimension(self) -> int | None:
        return len(self._rows[0].embedding) if self._rows else None

    async def insert(self, rows: list[DocumentRow]) -> None:
        """
        Store rows as one batch.

        Raises:
            ValueError: When vectors in the batch do not match the store dimension
        """
        if not rows:
            return

        expected = self._dimension() or len(rows[0].embedding)
        for row in rows:
            if len(row.embedding) != expected:
                raise ValueError(
                    f"Embedding dimension mismatch: expected {expected}, got {len(row.embedding)}"
                )

        now = datetime.now(timezone.utc)
        batch = [
            StoredDocument(
                id=str(uuid.uuid4()),
                content=row.content,
                embedding=row.embedding,
                metadata=row.metadata,
                created_at=now,
            )
            for row in rows
        ]
        self._rows.extend(batch)
        logger.debug(f"{__name__}:insert - Stored {len(batch)} rows (total={len(self._rows)})")

    async def similarity_search(
        self,
        vector: list[float],
        threshold: float,
        top_k: int,
    ) -> list[RetrievedMatch]:
        """
        Rank stored rows by cosine similarity to vector.

        Raises:
            ValueError: When the query dimension does not match the store dimension
        """
        if not self._rows:
            return []

        dimension = self._dimension()
        if len(vector) != dimension:
            raise ValueError(
                f"Query dimension mismatch: expected {dimension}, got {len(vector)}"
            )

        matrix = np.asarray([row.embedding for row in self._rows], dtype=np.float64)
        query = np.asarray(vector, dtype=np.float64)
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        dots = matrix @ query
        similarities = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)
        similarities = np.clip(similarities, -1.0, 1.0)

        results: list[RetrievedMatch] = []
        for position in np.argsort(-similarities, kind="stable"):
            similarity = float(similarities[position])
            if similarity <= threshold or len(results) >= top_k:
                break
            row = self._rows[position]
            results.append(
                RetrievedMatch(
                    content=row.content,
                    metadata=row.metadata.model_dump(),
                    similarity=similarity,
                )
            )
        return results

    async def list_row_headers(self) -> list[RowHeader]:
        """Return metadata and creation time of every stored row."""
        return [
            RowHeader(metadata=row.metadata.model_dump(), created_at=row.created_at)
            for row in self._rows
        ]

    async def delete_where_source(self, source: str) -> int:
        """Delete all rows for a source."""
        before = len(self._rows)
        self._rows = [row for row in self._rows if row.metadata.source != source]
        return before - len(self._rows)
