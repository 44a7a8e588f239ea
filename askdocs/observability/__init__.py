"""
Observability module.

Provides logging configuration, correlation ID tracking and request logging
middleware.
"""

from askdocs.observability.correlation import (
    bind_to_stream,
    get_correlation_id,
    set_correlation_id,
)
from askdocs.observability.logger import configure_logging

__all__ = [
    "bind_to_stream",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
