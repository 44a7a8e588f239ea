"""
API test fixtures.

Builds the application with its service dependencies overridden by
pipelines over the in-memory store.
"""

import pytest
from fastapi.testclient import TestClient

from askdocs.api.deps import (
    get_answering_pipeline,
    get_document_service,
    get_ingestion_pipeline,
)
from askdocs.api.main import create_app


@pytest.fixture
def client(ingestion_pipeline, answering_pipeline, document_service):
    """Test client wired to in-memory pipelines."""
    app = create_app()
    app.dependency_overrides[get_ingestion_pipeline] = lambda: ingestion_pipeline
    app.dependency_overrides[get_answering_pipeline] = lambda: answering_pipeline
    app.dependency_overrides[get_document_service] = lambda: document_service
    return TestClient(app)
