"""
Fixed-window text segmentation.

Splits text into overlapping chunks on character offsets. Boundaries are
purely positional; no sentence or word awareness.

Dependencies: askdocs.models.chunk, askdocs.core.exceptions
System role: First stage of document ingestion pipeline
"""

from askdocs.core.exceptions import InvalidParameterError
from askdocs.models.chunk import Chunk

DEFAULT_CHUNK_SIZE = 500
DEFAULT_OVERLAP = 50


def _validate_policy(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise InvalidParameterError("chunk_size must be positive", field="chunk_size")
    if overlap < 0:
        raise InvalidParameterError("overlap cannot be negative", field="overlap")
    if overlap >= chunk_size:
        raise InvalidParameterError(
            "overlap must be smaller than chunk_size",
            field="overlap",
            details={"chunk_size": chunk_size, "overlap": overlap},
        )


def segment(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[Chunk]:
    """
    Split text into overlapping fixed-size chunks.

    Each chunk starts chunk_size - overlap characters after the previous one.
    The final chunk may be shorter than chunk_size.

    Args:
        text: Source text
        chunk_size: Maximum chunk length in characters
        overlap: Characters shared by consecutive chunks

    Returns:
        list[Chunk]: Chunks in document order, indexed from 0

    Raises:
        InvalidParameterError: When chunk_size <= 0 or overlap is outside [0, chunk_size)
    """
    _validate_policy(chunk_size, overlap)

    step = chunk_size - overlap
    return [
        Chunk(text=text[position:position + chunk_size], index=index)
        for index, position in enumerate(range(0, len(text), step))
    ]


class TextSegmenter:
    """Segmenter bound to one chunking policy."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_OVERLAP,
    ) -> None:
        """
        Initialize segmenter with a validated chunking policy.

        Args:
            chunk_size: Maximum chunk size in characters
            overlap: Overlap between consecutive chunks

        Raises:
            InvalidParameterError: When the policy is invalid
        """
        _validate_policy(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap

    def segment(self, text: str) -> list[Chunk]:
        """Split text using the configured policy."""
        return segment(text, self.chunk_size, self.overlap)
