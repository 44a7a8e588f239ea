"""
Exception hierarchy for askdocs.

Every error carries a user-facing message plus a details dict for logs.
Keyword context passed to a constructor (field, attempts, operation, ...)
is merged into details when not None.

Taxonomy:
- InvalidParameterError: bad caller input, never retried
- EmbeddingServiceError: embedding provider failure after retries are exhausted
- StoreError: persistence or similarity query failure
- NoRelevantContextError: no stored chunk cleared the similarity threshold
- GenerationStreamError: generation stream failed or exceeded its deadline

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AskDocsException(Exception):
    """Base exception for all askdocs errors."""

    default_message = "askdocs error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        **context: Any,
    ) -> None:
        """
        Args:
            message: Human-readable error message (class default if None)
            details: Extra debugging context
            **context: Named context merged into details, skipped when None
        """
        self.message = message or self.default_message
        self.details = dict(details or {})
        self.details.update({key: value for key, value in context.items() if value is not None})
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidParameterError(AskDocsException):
    """Caller input failed validation (context: field)."""

    default_message = "Invalid parameter"


class EmbeddingServiceError(AskDocsException):
    """Embedding provider failed on every attempt (context: attempts)."""

    default_message = "Embedding service unavailable"


class StoreError(AskDocsException):
    """Vector store operation failed (context: operation)."""

    default_message = "Vector store operation failed"


class NoRelevantContextError(AskDocsException):
    """No stored chunk is similar enough to answer from (context: source_filter)."""

    default_message = "No relevant chunks found. Try rephrasing or uploading."


class GenerationStreamError(AskDocsException):
    """Generation stream failed or exceeded its deadline mid-flight."""

    default_message = "Generation stream failed"
