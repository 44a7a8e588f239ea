"""
Dependency injection container.

Builds the shared clients and pipelines once per process and exposes them
as FastAPI dependencies.

Dependencies: askdocs.configs, askdocs.application, askdocs.boundary
System role: DI container for service injection
"""

from askdocs.application import AnsweringPipeline, DocumentService, IngestionPipeline
from askdocs.boundary.llm.embedding_client import EmbeddingClient
from askdocs.boundary.llm.generation_client import GenerationClient
from askdocs.boundary.vdb.vector_store_client import VectorStoreClient
from askdocs.configs import get_settings
from askdocs.core.retry import RetryPolicy
from askdocs.core.segmenter import TextSegmenter
from askdocs.models.streaming import AnswerProtocol


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._vector_store = None
        self._embedding_client = None
        self._generation_client = None
        self._ingestion_pipeline = None
        self._answering_pipeline = None
        self._document_service = None

    @property
    def vector_store(self) -> VectorStoreClient:
        """Get cached vector store gateway."""
        if self._vector_store is None:
            from askdocs.boundary.vdb.vector_store_factory import get_vector_store

            settings = get_settings().vector_store
            self._vector_store = VectorStoreClient(
                backend=get_vector_store(),
                similarity_threshold=settings.similarity_threshold,
                top_k=settings.top_k,
            )
        return self._vector_store

    @property
    def embedding_client(self) -> EmbeddingClient:
        """Get cached embedding client."""
        if self._embedding_client is None:
            from askdocs.boundary.llm.provider_factory import get_embeddings

            llm = get_settings().llm
            self._embedding_client = EmbeddingClient(
                embeddings=get_embeddings(),
                policy=RetryPolicy(
                    max_attempts=llm.embedding_max_attempts,
                    base_delay=llm.embedding_base_delay_seconds,
                    backoff_factor=llm.embedding_backoff_factor,
                ),
            )
        return self._embedding_client

    @property
    def generation_client(self) -> GenerationClient:
        """Get cached generation client."""
        if self._generation_client is None:
            from askdocs.boundary.llm.provider_factory import get_chat_model

            self._generation_client = GenerationClient(model=get_chat_model())
        return self._generation_client

    @property
    def ingestion_pipeline(self) -> IngestionPipeline:
        """Get cached ingestion pipeline."""
        if self._ingestion_pipeline is None:
            ingestion = get_settings().ingestion
            self._ingestion_pipeline = IngestionPipeline(
                embedding_client=self.embedding_client,
                vector_store=self.vector_store,
                segmenter=TextSegmenter(
                    chunk_size=ingestion.chunk_size,
                    overlap=ingestion.chunk_overlap,
                ),
                max_text_chars=ingestion.max_text_chars,
                max_upload_bytes=ingestion.max_upload_bytes,
            )
        return self._ingestion_pipeline

    @property
    def answering_pipeline(self) -> AnsweringPipeline:
        """Get cached answering pipeline."""
        if self._answering_pipeline is None:
            llm = get_settings().llm
            self._answering_pipeline = AnsweringPipeline(
                embedding_client=self.embedding_client,
                vector_store=self.vector_store,
                generation_client=self.generation_client,
                protocol=AnswerProtocol(llm.answer_protocol.lower()),
                generation_timeout_seconds=llm.generation_timeout_seconds,
            )
        return self._answering_pipeline

    @property
    def document_service(self) -> DocumentService:
        """Get cached document service."""
        if self._document_service is None:
            self._document_service = DocumentService(vector_store=self.vector_store)
        return self._document_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._vector_store = None
        self._embedding_client = None
        self._generation_client = None
        self._ingestion_pipeline = None
        self._answering_pipeline = None
        self._document_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_ingestion_pipeline() -> IngestionPipeline:
    """Get the shared ingestion pipeline."""
    return get_service_cache().ingestion_pipeline


def get_answering_pipeline() -> AnsweringPipeline:
    """Get the shared answering pipeline."""
    return get_service_cache().answering_pipeline


def get_document_service() -> DocumentService:
    """Get the shared document service."""
    return get_service_cache().document_service
