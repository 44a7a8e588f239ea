"""
Vector database schemas.

Pydantic models for vector operations (rows to insert, listing headers, results).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ChunkMetadata(BaseModel):
    """
    Metadata attached to each stored chunk.

    total_chunks is identical across every row sharing the same source.
    """

    source: str = Field(description="Filename or identifier of the originating document")
    chunk_index: int = Field(ge=0, description="Position of the chunk within its document")
    total_chunks: int = Field(ge=1, description="Number of chunks produced from the document")


class DocumentRow(BaseModel):
    """Row to insert: one embedded chunk without id or timestamp."""

    content: str = Field(description="Chunk text content")
    embedding: list[float] = Field(description="Embedding vector")
    metadata: ChunkMetadata = Field(description="Chunk metadata")


class RowHeader(BaseModel):
    """Metadata and creation time of a stored row, as returned by a listing scan."""

    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class RetrievedMatch(BaseModel):
    """Single result from similarity search."""

    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata")
    similarity: float = Field(description="1 - cosine distance to the query vector")


class StoredDocument(DocumentRow):
    """Persisted row: a DocumentRow with its identity and creation time."""

    id: str = Field(description="Opaque unique row identifier")
    created_at: datetime = Field(description="Row creation time (UTC)")
