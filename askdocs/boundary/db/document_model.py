"""
Document chunk ORM model.

One row per embedded chunk: text content, pgvector embedding, JSONB metadata
({source, chunk_index, total_chunks}) and creation time. Rows are inserted
in batches and deleted by source; they are never updated.

Dependencies: sqlalchemy, pgvector, askdocs.configs
System role: Vector table definition
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pgvector.sqlalchemy import Vector
from sqlalchemy import DateTime, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from askdocs.boundary.db.base import Base
from askdocs.configs import get_settings

_vector_settings = get_settings().vector_store


class DocumentChunkModel(Base):
    """
    Embedded document chunk.

    Attributes:
        id: UUID primary key
        content: Chunk text
        embedding: Embedding vector (dimension from VECTOR_STORE_EMBEDDING_DIMENSION)
        metadata_: JSONB metadata, column name "metadata"
        created_at: Insert time (UTC)
    """

    __tablename__ = _vector_settings.table_name

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(
        Vector(_vector_settings.embedding_dimension),
        nullable=False,
    )
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSONB,
        nullable=False,
        default=dict,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
