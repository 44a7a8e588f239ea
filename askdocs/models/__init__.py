"""
Domain models.

Exports: Chunk, DocumentSummary, IngestionResult, ChatTurn, ChatRole, AnswerProtocol
"""

from askdocs.models.chat import ChatRole, ChatTurn
from askdocs.models.chunk import Chunk
from askdocs.models.document import DocumentSummary, IngestionResult
from askdocs.models.streaming import AnswerProtocol

__all__ = [
    "Chunk",
    "DocumentSummary",
    "IngestionResult",
    "ChatTurn",
    "ChatRole",
    "AnswerProtocol",
]
