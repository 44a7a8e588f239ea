"""
PostgreSQL + pgvector store for production retrieval.

Stores embedded chunks in one table and ranks them with the pgvector cosine
distance operator. Similarity is reported as 1 - cosine distance.

Dependencies: sqlalchemy, pgvector, askdocs.boundary.db
System role: Production vector store (pgvector)
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from askdocs.boundary.db.connection import create_tables
from askdocs.boundary.db.document_model import DocumentChunkModel
from askdocs.boundary.vdb.base import VectorStoreBackend
from askdocs.boundary.vdb.vector_schemas import DocumentRow, RetrievedMatch, RowHeader

logger = logging.getLogger(__name__)


class PgVectorStore(VectorStoreBackend):
    """
    pgvector-backed similarity store.

    Each public method runs in its own session; inserts run in a single
    transaction so a batch is visible entirely or not at all.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize store with a session factory.

        Args:
            session_factory: Async session factory bound to the target database
        """
        self._session_factory = session_factory

    async def insert(self, rows: list[DocumentRow]) -> None:
        """Insert all rows in one transaction."""
        if not rows:
            return

        async with self._session_factory() as session, session.begin():
            session.add_all([
                DocumentChunkModel(
                    content=row.content,
                    embedding=row.embedding,
                    metadata_=row.metadata.model_dump(),
                )
                for row in rows
            ])

        logger.info(
            f"{__name__}:insert - Inserted {len(rows)} rows",
            extra={"chunk_count": len(rows)},
        )

    async def similarity_search(
        self,
        vector: list[float],
        threshold: float,
        top_k: int,
    ) -> list[RetrievedMatch]:
        """Return up to top_k rows with 1 - cosine_distance above threshold, closest first."""
        distance = DocumentChunkModel.embedding.cosine_distance(vector)
        stmt = (
            select(
                DocumentChunkModel.content,
                DocumentChunkModel.metadata_,
                (1 - distance).label("similarity"),
            )
            .where(distance < 1 - threshold)
            .order_by(distance)
            .limit(top_k)
        )

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.all()

        return [
            RetrievedMatch(
                content=content,
                metadata=metadata or {},
                similarity=float(similarity),
            )
            for content, metadata, similarity in rows
        ]

    async def list_row_headers(self) -> list[RowHeader]:
        """Scan metadata and creation time of every row."""
        stmt = select(DocumentChunkModel.metadata_, DocumentChunkModel.created_at)

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.all()

        return [
            RowHeader(metadata=metadata or {}, created_at=created_at)
            for metadata, created_at in rows
        ]

    async def delete_where_source(self, source: str) -> int:
        """Delete all rows whose metadata source equals source."""
        stmt = delete(DocumentChunkModel).where(
            DocumentChunkModel.metadata_["source"].astext == source
        )

        async with self._session_factory() as session, session.begin():
            result = await session.execute(stmt)

        return result.rowcount or 0

    async def initialize(self) -> None:
        """Create the pgvector extension and the chunks table if missing."""
        await create_tables(self._session_factory.kw["bind"])
        logger.info(f"{__name__}:initialize - Schema ready")

    async def close(self) -> None:
        """Dispose the engine connection pool."""
        await self._session_factory.kw["bind"].dispose()
