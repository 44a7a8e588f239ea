"""
Question answering API endpoint.

Routes: POST /rag

Streams the answer as it is generated. With the marker protocol the body is
the answer text followed by "\n__SOURCES__" and a JSON citation array; with
the framed protocol it is a sequence of length-prefixed frames.

Dependencies: askdocs.application.answering_service, askdocs.models
System role: Streaming question answering HTTP API
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import aclosing

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from askdocs.api.deps import get_answering_pipeline
from askdocs.api.routers.router_utils import to_http_exception
from askdocs.application.answering_service import AnsweringPipeline
from askdocs.models.chat import RagRequest
from askdocs.models.streaming import MEDIA_TYPES
from askdocs.observability.correlation import bind_to_stream, get_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rag", tags=["rag"])


async def _relay(stream: AsyncIterator[bytes]) -> AsyncGenerator[bytes, None]:
    """Forward the answer stream, closing it when the client goes away."""
    try:
        async with aclosing(stream):
            async for data in stream:
                yield data
    except Exception as e:
        logger.error(
            f"{__name__}:_relay - Answer stream terminated: {type(e).__name__}: {e}",
            extra={"error_type": type(e).__name__},
        )
        raise


@router.post("")
async def answer_question(
    request: RagRequest,
    pipeline: AnsweringPipeline = Depends(get_answering_pipeline),
) -> StreamingResponse:
    """
    Answer a question from the stored documents.

    Retrieval happens before the response starts, so its failures are
    reported as HTTP errors; generation failures end the stream early.

    Args:
        request: RagRequest with question, optional source and protocol
        pipeline: Injected AnsweringPipeline

    Returns:
        StreamingResponse: Streamed answer and citations

    Raises:
        HTTPException(400): Missing or invalid question
        HTTPException(404): No relevant chunks found
        HTTPException(503): Embedding service unavailable
        HTTPException(500): Retrieval failed
    """
    protocol = request.protocol or pipeline.protocol
    try:
        stream = await pipeline.answer(
            request.question,
            source_filter=request.document_source,
            protocol=protocol,
        )
    except Exception as e:
        raise to_http_exception(e, "answer_question") from e

    return StreamingResponse(
        bind_to_stream(_relay(stream), get_correlation_id()),
        media_type=MEDIA_TYPES[protocol],
        headers={"X-Answer-Protocol": protocol.value},
    )
