"""
Structured logging helpers.

Request payloads (questions, document text, PDF bytes) only reach log
records as bounded previews or size summaries.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

PREVIEW_LENGTH = 200


def safe_log_value(value: Any, max_length: int = PREVIEW_LENGTH) -> str:
    """
    Render a value for a log record.

    Strings are truncated to max_length; bytes and collections are replaced
    by a size summary. Never raises.
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, (bytes, bytearray)):
            return f"{type(value).__name__}({len(value)} bytes)"
        if isinstance(value, (list, tuple, set)):
            return f"{type(value).__name__}({len(value)} items)"
        if isinstance(value, dict):
            return f"dict({len(value)} keys)"

        rendered = value if isinstance(value, str) else str(value)
        if len(rendered) <= max_length:
            return rendered
        return f"{rendered[:max_length]}... (truncated, {len(rendered)} total)"
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def _safe_extra(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(value) for key, value in context.items()}


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Log message at level with every context value passed through safe_log_value."""
    logger.log(level, message, extra=_safe_extra(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with traceback, its type and message, and safe context.

    For AskDocsException the user-facing message is logged, not the details.
    """
    extra = _safe_extra(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(getattr(exc, "message", None) or str(exc))
    logger.error(message, exc_info=exc, extra=extra)
