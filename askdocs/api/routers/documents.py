"""
Document API endpoints.

Routes: GET /documents, DELETE /documents

Dependencies: askdocs.application.document_service, askdocs.models
System role: Document management HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from askdocs.api.deps import get_document_service
from askdocs.api.routers.router_utils import to_http_exception
from askdocs.application.document_service import DocumentService
from askdocs.models.document import DeleteDocumentRequest, DocumentSummary


class DeleteResponse(BaseModel):
    """Delete result returned to the client."""

    success: bool = True


router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=list[DocumentSummary])
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> list[DocumentSummary]:
    """
    List stored documents grouped by source.

    Raises:
        HTTPException(500): Listing failed
    """
    try:
        return await document_service.list_sources()
    except Exception as e:
        raise to_http_exception(e, "list_documents") from e


@router.delete("", response_model=DeleteResponse)
async def delete_document(
    request: DeleteDocumentRequest,
    document_service: DocumentService = Depends(get_document_service),
) -> DeleteResponse:
    """
    Delete every chunk of a source. Unknown sources succeed as a no-op.

    Args:
        request: DeleteDocumentRequest with source
        document_service: Injected DocumentService

    Returns:
        DeleteResponse: Success flag

    Raises:
        HTTPException(400): Missing source
        HTTPException(500): Deletion failed
    """
    try:
        await document_service.delete_source(request.source)
    except Exception as e:
        raise to_http_exception(e, "delete_document") from e
    return DeleteResponse()
