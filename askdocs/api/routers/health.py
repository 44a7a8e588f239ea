"""
Liveness endpoint.

Routes: GET /health

Reports the package version and the configured vector store backend
without touching the store or the model providers.

Dependencies: fastapi, askdocs.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter
from pydantic import BaseModel

from askdocs import __version__
from askdocs.configs import get_settings

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    vector_store: str


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        vector_store=get_settings().vector_store.store_type,
    )
