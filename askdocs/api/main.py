"""
askdocs HTTP application.

create_app() wires middleware and the /api/v1 routers; the lifespan owns
the shared clients and the vector backend connection.

Dependencies: fastapi, uvicorn, askdocs.api, askdocs.observability
System role: API entry point
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from askdocs import __version__
from askdocs.api.deps import get_service_cache
from askdocs.configs import get_settings
from askdocs.observability.correlation import CORRELATION_HEADER
from askdocs.observability.logger import configure_logging
from askdocs.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import documents_router, health_router, rag_router, upload_router

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)

    cache = get_service_cache()
    backend = cache.vector_store.backend
    await backend.initialize()
    # build pipelines now so provider misconfiguration fails at startup
    cache.ingestion_pipeline
    cache.answering_pipeline
    cache.document_service
    logger.info(
        f"{__name__}:lifespan - askdocs {__version__} ready",
        extra={"vector_backend": type(backend).__name__},
    )

    try:
        yield
    finally:
        await backend.close()
        cache.clear()
        logger.info(f"{__name__}:lifespan - Shared clients released")


def create_app() -> FastAPI:
    app = FastAPI(
        title="askdocs RAG API",
        description="Document question answering with streamed, cited answers",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER, "X-Answer-Protocol"],
    )
    # last added runs first: the correlation ID is bound before the access log line
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    for router in (health_router, upload_router, documents_router, rag_router):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("askdocs.api.main:app", host="0.0.0.0", port=8000)
