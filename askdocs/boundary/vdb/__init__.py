"""
Vector database boundary layer.

Provides the similarity-search backends and the gateway used by the pipelines.
- InMemoryVectorStore: numpy cosine ranking for local development and tests
- PgVectorStore: PostgreSQL + pgvector for production
- VectorStoreClient: gateway enforcing the retrieval policy over a backend

Dependencies: numpy, sqlalchemy, pgvector
System role: Vector store adapter for RAG retrieval
"""

from askdocs.boundary.vdb.vector_schemas import DocumentRow, RetrievedMatch, RowHeader

__all__ = [
    "DocumentRow",
    "RetrievedMatch",
    "RowHeader",
]
