"""
Ingestion pipeline.

Turns a raw document into stored, embedded chunks:
1. Validate input
2. Segment into overlapping chunks
3. Embed all chunks concurrently
4. Pair each chunk with its vector and metadata
5. Insert all rows as one batch

Any embedding failure fails the whole ingestion before anything is written.

Dependencies: askdocs.core, askdocs.boundary.llm, askdocs.boundary.vdb
System role: Document upload orchestration
"""

import asyncio
import logging
import time

from askdocs.application.parser import extract_pdf_text
from askdocs.boundary.llm.embedding_client import EmbeddingClient
from askdocs.boundary.vdb.vector_schemas import ChunkMetadata, DocumentRow
from askdocs.boundary.vdb.vector_store_client import VectorStoreClient
from askdocs.core.exceptions import InvalidParameterError
from askdocs.core.segmenter import TextSegmenter
from askdocs.models.document import IngestionResult

logger = logging.getLogger(__name__)

MAX_TEXT_CHARS = 50_000
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
PDF_CONTENT_TYPE = "application/pdf"


class IngestionPipeline:
    """
    Ingestion pipeline for plain text and PDF uploads.

    Shares the embedding client and vector store gateway with the answering
    pipeline; holds no per-document state.
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_store: VectorStoreClient,
        segmenter: TextSegmenter | None = None,
        max_text_chars: int = MAX_TEXT_CHARS,
        max_upload_bytes: int = MAX_UPLOAD_BYTES,
    ) -> None:
        """
        Initialize ingestion pipeline.

        Args:
            embedding_client: Client used to embed every chunk
            vector_store: Gateway receiving the rows
            segmenter: Chunking policy (defaults to 500/50)
            max_text_chars: Character ceiling for plain text submissions
            max_upload_bytes: Byte ceiling for PDF uploads
        """
        self.embedding_client = embedding_client
        self.vector_store = vector_store
        self.segmenter = segmenter or TextSegmenter()
        self.max_text_chars = max_text_chars
        self.max_upload_bytes = max_upload_bytes

    @staticmethod
    def _validate_filename(filename: str | None) -> None:
        if not filename or not isinstance(filename, str):
            raise InvalidParameterError(
                "Invalid filename. Expecting non-empty string.",
                field="filename",
            )

    async def ingest(self, raw_text: str | None, filename: str | None) -> IngestionResult:
        """
        Ingest a plain text document.

        Args:
            raw_text: Document text
            filename: Source name recorded on every chunk

        Returns:
            IngestionResult: Chunks written and elapsed seconds

        Raises:
            InvalidParameterError: When text or filename is invalid or text is too long
            EmbeddingServiceError: When any chunk cannot be embedded
            StoreError: When the batch insert fails
        """
        started = time.perf_counter()

        if not raw_text or not isinstance(raw_text, str):
            raise InvalidParameterError(
                "Invalid content. Expecting non-empty string.",
                field="content",
            )
        self._validate_filename(filename)
        if len(raw_text) > self.max_text_chars:
            raise InvalidParameterError(
                f"File too large. Limit is {self.max_text_chars:,} characters.",
                field="content",
                details={"length": len(raw_text)},
            )

        return await self._ingest_text(raw_text, filename, started)

    async def ingest_pdf(
        self,
        data: bytes,
        filename: str | None,
        content_type: str | None = None,
    ) -> IngestionResult:
        """
        Ingest a PDF upload.

        Size and type are checked before any extraction work.

        Args:
            data: Raw PDF bytes
            filename: Source name recorded on every chunk
            content_type: Declared media type of the upload

        Returns:
            IngestionResult: Chunks written and elapsed seconds

        Raises:
            InvalidParameterError: When the file is too large, not a PDF or has no text
            EmbeddingServiceError: When any chunk cannot be embedded
            StoreError: When the batch insert fails
        """
        started = time.perf_counter()

        self._validate_filename(filename)
        if len(data) > self.max_upload_bytes:
            raise InvalidParameterError(
                f"File too large. Limit is {self.max_upload_bytes // (1024 * 1024)}MB.",
                field="file",
                details={"size": len(data)},
            )
        is_pdf = content_type == PDF_CONTENT_TYPE or filename.lower().endswith(".pdf")
        if not is_pdf:
            raise InvalidParameterError(
                "Only PDF files are supported via file upload. Use text paste for .txt files.",
                field="file",
                details={"content_type": content_type},
            )

        text = await asyncio.to_thread(extract_pdf_text, data, filename)
        return await self._ingest_text(text, filename, started)

    async def _ingest_text(self, text: str, filename: str, started: float) -> IngestionResult:
        chunks = self.segmenter.segment(text)
        logger.info(
            f"{__name__}:ingest - Segmented into {len(chunks)} chunks",
            extra={"source": filename, "chunk_count": len(chunks), "text_len": len(text)},
        )

        tasks = [asyncio.ensure_future(self.embedding_client.embed(chunk.text)) for chunk in chunks]
        try:
            vectors = await asyncio.gather(*tasks)
        except Exception:
            # one exhausted chunk fails the document; stop the remaining calls
            for task in tasks:
                task.cancel()
            raise

        rows = [
            DocumentRow(
                content=chunk.text,
                embedding=vector,
                metadata=ChunkMetadata(
                    source=filename,
                    chunk_index=chunk.index,
                    total_chunks=len(chunks),
                ),
            )
            for chunk, vector in zip(chunks, vectors, strict=True)
        ]

        inserted = await self.vector_store.insert_all(rows)
        elapsed = round(time.perf_counter() - started, 2)

        logger.info(
            f"{__name__}:ingest - Ingested {inserted} chunks in {elapsed}s",
            extra={"source": filename, "chunk_count": inserted, "elapsed_seconds": elapsed},
        )
        return IngestionResult(
            source=filename,
            chunks_created=inserted,
            elapsed_seconds=elapsed,
        )
