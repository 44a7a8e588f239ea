"""
Embedding client with bounded retry.

Embeds one string per call through a langchain Embeddings provider. Failed
calls, including responses without a vector, are retried with exponential
backoff; once the attempt budget is spent the last error is raised as
EmbeddingServiceError.

Dependencies: langchain_core, askdocs.core.retry
System role: Embedding generation adapter shared by ingestion and answering
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from langchain_core.embeddings import Embeddings

from askdocs.core.exceptions import EmbeddingServiceError
from askdocs.core.retry import RetryPolicy, retry_async

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Resilient single-text embedding client."""

    def __init__(
        self,
        embeddings: Embeddings,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            embeddings: langchain embedding model
            policy: Retry policy (defaults to 3 attempts, 0.25s base delay, doubling)
            sleep: Awaitable sleep used between attempts
        """
        self._embeddings = embeddings
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        """Retry policy applied to every call."""
        return self._policy

    async def embed(self, text: str) -> list[float]:
        """
        Generate the embedding vector for one text.

        Each call keeps its own attempt counter, so concurrent calls retry
        independently.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingServiceError: When every attempt failed
        """
        attempts = 0

        async def attempt() -> list[float]:
            nonlocal attempts
            attempts += 1
            try:
                vector = await self._embeddings.aembed_query(text)
            except Exception as e:
                raise EmbeddingServiceError(str(e), attempts=attempts) from e
            if not vector:
                raise EmbeddingServiceError(
                    "No embedding returned from embedding provider",
                    attempts=attempts,
                )
            return [float(value) for value in vector]

        try:
            return await retry_async(
                attempt,
                self._policy,
                retry_on=EmbeddingServiceError,
                sleep=self._sleep,
            )
        except EmbeddingServiceError as e:
            logger.error(
                f"{__name__}:embed - Giving up after {attempts} attempts: {e.message}",
                extra={"attempts": attempts, "text_len": len(text)},
            )
            raise
