"""
Router utility functions.

Maps application exceptions to HTTP errors so every endpoint reports
failures the same way.

Dependencies: fastapi, askdocs.core.exceptions
System role: Error translation for HTTP endpoints
"""

import logging

from fastapi import HTTPException

from askdocs.core.exceptions import (
    AskDocsException,
    EmbeddingServiceError,
    InvalidParameterError,
    NoRelevantContextError,
    StoreError,
)
from askdocs.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[AskDocsException], int] = {
    InvalidParameterError: 400,
    NoRelevantContextError: 404,
    StoreError: 500,
    EmbeddingServiceError: 503,
}


def to_http_exception(exc: Exception, operation: str) -> HTTPException:
    """
    Translate an exception raised by a service into an HTTPException.

    Caller errors are logged as warnings; everything else with a traceback.

    Args:
        exc: Exception raised by the service
        operation: Endpoint name for log context

    Returns:
        HTTPException: Error carrying the user-facing message as detail
    """
    if isinstance(exc, AskDocsException):
        status_code = next(
            (code for exc_type, code in STATUS_CODES.items() if isinstance(exc, exc_type)),
            500,
        )
        detail = exc.message
    else:
        status_code = 500
        detail = f"Internal server error: {exc}"

    if status_code < 500:
        logger.warning(
            f"{operation} rejected: {detail}",
            extra={"operation": operation, "status_code": status_code},
        )
    else:
        log_exception_with_context(
            logger,
            f"{operation} failed",
            exc,
            operation=operation,
            status_code=status_code,
        )
    return HTTPException(status_code=status_code, detail=detail)
