"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic embeddings, scripted chat streams, in-memory vector
store and pipelines wired from them
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

from collections.abc import AsyncIterator

import pytest
from langchain_core.embeddings import Embeddings

from askdocs.application import AnsweringPipeline, DocumentService, IngestionPipeline
from askdocs.boundary.llm.embedding_client import EmbeddingClient
from askdocs.boundary.vdb.memory_store import InMemoryVectorStore
from askdocs.boundary.vdb.vector_store_client import VectorStoreClient
from askdocs.core.retry import RetryPolicy
from askdocs.core.segmenter import TextSegmenter

VOCABULARY = ["fox", "dog", "cat", "bird", "python", "database"]


class KeywordEmbeddings(Embeddings):
    """
    Embeds text as keyword counts over a fixed vocabulary.

    Texts sharing keywords are similar; texts with no keyword get a zero
    vector, which is similar to nothing.
    """

    def __init__(self, fail_times: int = 0, error: Exception | None = None) -> None:
        self.fail_times = fail_times
        self.error = error or ConnectionError("embedding provider unavailable")
        self.calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        lowered = text.lower()
        return [float(lowered.count(word)) for word in VOCABULARY]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._vector(text)

    async def aembed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        if len(self.calls) <= self.fail_times:
            raise self.error
        return self._vector(text)


class ScriptedGenerationClient:
    """
    Generation client replaying a fixed list of text increments.

    Records the prompts it receives and whether its stream was closed early.
    """

    def __init__(self, tokens: list[str], error: Exception | None = None) -> None:
        self.tokens = tokens
        self.error = error
        self.prompts: list[tuple[str, str]] = []
        self.closed = False
        self.emitted = 0

    async def stream_chat(self, system_instruction: str, user_message: str) -> AsyncIterator[str]:
        self.prompts.append((system_instruction, user_message))
        try:
            for token in self.tokens:
                self.emitted += 1
                yield token
            if self.error is not None:
                raise self.error
        except GeneratorExit:
            self.closed = True
            raise


async def no_sleep(_: float) -> None:
    return None


@pytest.fixture
def embeddings():
    """Keyword embeddings that never fail."""
    return KeywordEmbeddings()


@pytest.fixture
def embedding_client(embeddings):
    """Embedding client with default policy and no real waiting."""
    return EmbeddingClient(embeddings=embeddings, policy=RetryPolicy(), sleep=no_sleep)


@pytest.fixture
def memory_store():
    """Empty in-memory vector store backend."""
    return InMemoryVectorStore()


@pytest.fixture
def vector_store(memory_store):
    """Vector store gateway with threshold 0.7 and top_k 3."""
    return VectorStoreClient(backend=memory_store, similarity_threshold=0.7, top_k=3)


@pytest.fixture
def ingestion_pipeline(embedding_client, vector_store):
    """Ingestion pipeline over the in-memory store."""
    return IngestionPipeline(
        embedding_client=embedding_client,
        vector_store=vector_store,
        segmenter=TextSegmenter(chunk_size=500, overlap=50),
    )


@pytest.fixture
def generation_client():
    """Generation client replaying a short answer."""
    return ScriptedGenerationClient(["The fox ", "is quick", "."])


@pytest.fixture
def answering_pipeline(embedding_client, vector_store, generation_client):
    """Answering pipeline over the in-memory store."""
    return AnsweringPipeline(
        embedding_client=embedding_client,
        vector_store=vector_store,
        generation_client=generation_client,
    )


@pytest.fixture
def document_service(vector_store):
    """Document service over the in-memory store."""
    return DocumentService(vector_store=vector_store)
