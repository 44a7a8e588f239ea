"""
Test suite for the question answering endpoint.

Covers both answer stream protocols, source filtering and the mapping of
retrieval failures to HTTP errors before the stream starts.
"""

import json
import struct

from askdocs.api.deps import get_answering_pipeline
from askdocs.application.answering_service import AnsweringPipeline
from askdocs.boundary.llm.embedding_client import EmbeddingClient
from askdocs.observability.correlation import get_correlation_id
from tests.conftest import KeywordEmbeddings, no_sleep


class IdRecordingGenerationClient:
    """Generation client noting the correlation ID seen at each token."""

    def __init__(self) -> None:
        self.seen: list[str] = []

    async def stream_chat(self, system_instruction: str, user_message: str):
        for token in ["The fox ", "runs."]:
            self.seen.append(get_correlation_id())
            yield token


def upload(client, content: str, filename: str) -> None:
    response = client.post("/api/v1/upload", json={"content": content, "filename": filename})
    assert response.status_code == 200


def test_rag_streams_answer_and_sources(client):
    upload(client, "The fox jumps over the fox.", "fox.txt")

    response = client.post("/api/v1/rag", json={"question": "What does the fox do?"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    answer, payload = response.text.split("\n__SOURCES__", 1)
    assert answer == "The fox is quick."
    sources = json.loads(payload)
    assert sources[0]["content"] == "The fox jumps over the fox."
    assert sources[0]["metadata"]["source"] == "fox.txt"
    assert 0.0 <= sources[0]["similarity"] <= 1.0


def test_rag_filters_by_document_source(client):
    upload(client, "The fox runs.", "a.txt")
    upload(client, "A fox sleeps.", "b.txt")

    response = client.post(
        "/api/v1/rag",
        json={"question": "fox", "document_source": "a.txt"},
    )

    assert response.status_code == 200
    sources = json.loads(response.text.split("__SOURCES__", 1)[1])
    assert [s["metadata"]["source"] for s in sources] == ["a.txt"]


def test_rag_framed_protocol(client):
    upload(client, "The fox runs.", "fox.txt")

    response = client.post("/api/v1/rag", json={"question": "fox", "protocol": "framed"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/octet-stream"
    body = response.content
    kinds = []
    while body:
        (length,) = struct.unpack(">I", body[1:5])
        kinds.append(body[:1])
        body = body[5 + length:]
    assert kinds == [b"T", b"T", b"T", b"C"]


def test_rag_missing_question(client):
    response = client.post("/api/v1/rag", json={})

    assert response.status_code == 400
    assert response.json() == {"detail": "Missing or invalid question"}


def test_rag_non_string_question(client, embeddings):
    response = client.post("/api/v1/rag", json={"question": 123})

    assert response.status_code == 400
    assert response.json() == {"detail": "Missing or invalid question"}
    assert embeddings.calls == []


def test_rag_no_relevant_chunks(client):
    upload(client, "The fox runs.", "fox.txt")

    response = client.post(
        "/api/v1/rag",
        json={"question": "fox", "document_source": "nonexistent.txt"},
    )

    assert response.status_code == 404
    assert response.json() == {"detail": "No relevant chunks found. Try rephrasing or uploading."}


def test_rag_embedding_unavailable(client, vector_store, generation_client):
    failing = AnsweringPipeline(
        embedding_client=EmbeddingClient(KeywordEmbeddings(fail_times=3), sleep=no_sleep),
        vector_store=vector_store,
        generation_client=generation_client,
    )
    client.app.dependency_overrides[get_answering_pipeline] = lambda: failing

    response = client.post("/api/v1/rag", json={"question": "fox"})

    assert response.status_code == 503


def test_rag_stream_keeps_request_correlation_id(client, embedding_client, vector_store):
    upload(client, "The fox runs.", "fox.txt")
    recorder = IdRecordingGenerationClient()
    client.app.dependency_overrides[get_answering_pipeline] = lambda: AnsweringPipeline(
        embedding_client=embedding_client,
        vector_store=vector_store,
        generation_client=recorder,
    )

    response = client.post(
        "/api/v1/rag",
        json={"question": "fox"},
        headers={"X-Correlation-ID": "req-42"},
    )

    assert response.status_code == 200
    assert response.text.startswith("The fox runs.\n__SOURCES__")
    assert response.headers["X-Correlation-ID"] == "req-42"
    assert recorder.seen == ["req-42", "req-42"]
