"""
Model provider boundary layer.

Provides the embedding client (with retry) and the generation client
(token streaming) over langchain model interfaces.

Dependencies: langchain_core, langchain_google_genai, langchain_aws
System role: Model provider adapters
"""

from askdocs.boundary.llm.embedding_client import EmbeddingClient
from askdocs.boundary.llm.generation_client import GenerationClient

__all__ = ["EmbeddingClient", "GenerationClient"]
