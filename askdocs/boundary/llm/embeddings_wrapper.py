"""
Gemini embeddings pinned to the vector column width.

The pgvector column is declared with a fixed dimension, and the Gemini
embedding endpoint defaults to 3072. Every embed call made through this
class requests the configured dimension unless the caller passes one.

Dependencies: langchain_google_genai
System role: Embedding dimension consistency for the vector table
"""

import logging
from typing import Any

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings that always sends output_dimensionality."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs: Any,
    ) -> None:
        """
        Args:
            model: Gemini embedding model ID (gemini-embedding-001 supports 768, 1536, 3072)
            output_dimensionality: Dimension requested on every call
            **kwargs: Passed through to GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Gemini embeddings model={model} dimension={output_dimensionality}"
        )

    def _with_dimension(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        if kwargs.get("output_dimensionality") is None:
            kwargs["output_dimensionality"] = self._output_dimensionality
        return kwargs

    def embed_documents(self, texts: list[str], **kwargs: Any) -> list[list[float]]:
        return super().embed_documents(texts, **self._with_dimension(kwargs))

    def embed_query(self, text: str, **kwargs: Any) -> list[float]:
        return super().embed_query(text, **self._with_dimension(kwargs))

    async def aembed_query(self, text: str, **kwargs: Any) -> list[float]:
        return await super().aembed_query(text, **self._with_dimension(kwargs))
