"""
Chunk domain model.

Represents one positional segment of a source document.

Dependencies: pydantic
System role: Segmenter output data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Contiguous character segment of a document with its position in the sequence."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text content")
    index: int = Field(ge=0, description="0-based position within the document's chunk sequence")
