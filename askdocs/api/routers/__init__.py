"""API routers."""

from .documents import router as documents_router
from .health import router as health_router
from .rag import router as rag_router
from .upload import router as upload_router

__all__ = [
    "documents_router",
    "health_router",
    "rag_router",
    "upload_router",
]
