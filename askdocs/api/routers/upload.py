"""
Upload API endpoints.

Routes: POST /upload (JSON text), POST /upload/pdf (multipart PDF)

Dependencies: askdocs.application.ingestion_service, askdocs.models
System role: Document ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from askdocs.api.deps import get_ingestion_pipeline
from askdocs.api.routers.router_utils import to_http_exception
from askdocs.application.ingestion_service import IngestionPipeline
from askdocs.models.document import UploadRequest, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("", response_model=UploadResponse)
async def upload_text(
    request: UploadRequest,
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
) -> UploadResponse:
    """
    Ingest a pasted plain text document.

    Args:
        request: UploadRequest with content and filename
        pipeline: Injected IngestionPipeline

    Returns:
        UploadResponse: Chunks created and time taken in seconds

    Raises:
        HTTPException(400): Invalid content, filename or too long
        HTTPException(503): Embedding service unavailable
        HTTPException(500): Storage failed
    """
    try:
        result = await pipeline.ingest(request.content, request.filename)
    except Exception as e:
        raise to_http_exception(e, "upload_text") from e
    return UploadResponse.from_result(result)


@router.post("/pdf", response_model=UploadResponse)
async def upload_pdf(
    file: UploadFile = File(...),
    filename: str | None = Form(default=None),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
) -> UploadResponse:
    """
    Ingest an uploaded PDF document.

    Args:
        file: Uploaded PDF file
        filename: Optional source name overriding the uploaded file name
        pipeline: Injected IngestionPipeline

    Returns:
        UploadResponse: Chunks created and time taken in seconds

    Raises:
        HTTPException(400): Too large, not a PDF, protected or without text
        HTTPException(503): Embedding service unavailable
        HTTPException(500): Storage failed
    """
    source = filename or file.filename
    try:
        data = await file.read()
    except Exception as e:
        logger.exception("Failed to read uploaded file", extra={"source": source})
        raise HTTPException(status_code=400, detail=f"Failed to read uploaded file: {e}") from e
    finally:
        await file.close()

    try:
        result = await pipeline.ingest_pdf(data, source, content_type=file.content_type)
    except Exception as e:
        raise to_http_exception(e, "upload_pdf") from e
    return UploadResponse.from_result(result)
