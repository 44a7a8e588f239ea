"""Application services orchestrating ingestion, answering and document management."""

from .answering_service import AnsweringPipeline
from .document_service import DocumentService
from .ingestion_service import IngestionPipeline

__all__ = [
    "AnsweringPipeline",
    "DocumentService",
    "IngestionPipeline",
]
