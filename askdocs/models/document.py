"""
Document domain models.

Request/response schemas for ingestion and the derived per-source summary.

Dependencies: pydantic
System role: Document data structures and HTTP contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class DocumentSummary(BaseModel):
    """Per-source summary derived by grouping stored chunks."""

    source: str = Field(description="Filename or identifier of the ingested document")
    chunk_count: int = Field(description="Number of stored chunks for this source")
    created_at: datetime = Field(description="Earliest creation time among the source's chunks")


class IngestionResult(BaseModel):
    """Outcome of a successful ingestion."""

    source: str
    chunks_created: int = Field(description="Number of rows written")
    elapsed_seconds: float = Field(description="Wall-clock ingestion time in seconds")


class UploadRequest(BaseModel):
    """
    Plain text upload payload.

    Fields are left untyped: the ingestion pipeline validates them so a
    non-string value gets the same 400 message as a missing one.
    """

    content: Any = None
    filename: Any = None


class UploadResponse(BaseModel):
    """Upload result returned to the client."""

    success: bool = True
    chunks_created: int
    time_taken: float

    @classmethod
    def from_result(cls, result: IngestionResult) -> "UploadResponse":
        """Create response from an ingestion result."""
        return cls(chunks_created=result.chunks_created, time_taken=result.elapsed_seconds)


class DeleteDocumentRequest(BaseModel):
    """Delete-by-source payload."""

    source: Any = Field(default=None, description="Source to delete, validated by the document service")
