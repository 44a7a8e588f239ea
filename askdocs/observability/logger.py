"""
Process-wide logging setup.

Dependencies: logging (stdlib), askdocs.observability.correlation
System role: Centralized logging configuration
"""

import logging
import sys

from askdocs.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("httpx", "httpcore", "botocore", "urllib3", "sqlalchemy.engine")


class CorrelationIdFilter(logging.Filter):
    """Stamp records with the request's correlation ID ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stdout handler on the root logger.

    Safe to call more than once: previously installed root handlers are
    replaced, so uvicorn reloads do not duplicate output.

    Args:
        level: Root log level name, case-insensitive
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
