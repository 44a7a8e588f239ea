"""
askdocs: retrieval-augmented question answering over uploaded documents.

Layers:
- configs: pydantic-settings configuration
- models: pydantic data structures
- core: segmentation, retry, prompt and answer stream protocol logic
- boundary: embedding, generation and vector store adapters
- application: ingestion and answering pipelines
- api: FastAPI HTTP surface
"""

__version__ = "0.1.0"
