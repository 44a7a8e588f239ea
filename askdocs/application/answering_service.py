"""
Answering pipeline for retrieval-augmented question answering.

Embeds the question, retrieves the closest chunks, builds a grounded prompt
and streams the generated answer followed by its citations.

Steps up to prompt construction run eagerly inside answer(), so their
failures surface before the first byte of the stream:
Validating -> EmbeddingQuestion -> QueryingStore -> BuildingPrompt -> Streaming
-> EmittingCitations -> Done

Dependencies: askdocs.core, askdocs.boundary.llm, askdocs.boundary.vdb
System role: Question answering orchestration
"""

import logging
from collections.abc import AsyncIterator

from askdocs.boundary.llm.embedding_client import EmbeddingClient
from askdocs.boundary.llm.generation_client import GenerationClient
from askdocs.boundary.vdb.vector_store_client import VectorStoreClient
from askdocs.core.answer_stream import stream_answer
from askdocs.core.exceptions import InvalidParameterError, NoRelevantContextError
from askdocs.core.prompt import build_prompt
from askdocs.models.streaming import AnswerProtocol

logger = logging.getLogger(__name__)


class AnsweringPipeline:
    """Question answering over stored chunks."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_store: VectorStoreClient,
        generation_client: GenerationClient,
        protocol: AnswerProtocol = AnswerProtocol.MARKER,
        generation_timeout_seconds: float | None = None,
    ) -> None:
        """
        Initialize answering pipeline.

        Args:
            embedding_client: Client used to embed the question
            vector_store: Gateway queried for context
            generation_client: Streaming chat model client
            protocol: Default wire format of the answer stream
            generation_timeout_seconds: Deadline for the whole generation stream
        """
        self.embedding_client = embedding_client
        self.vector_store = vector_store
        self.generation_client = generation_client
        self.protocol = protocol
        self.generation_timeout_seconds = generation_timeout_seconds

    def _stage(self, stage: str, **context) -> None:
        logger.info(f"{__name__}:answer - {stage}", extra={"stage": stage, **context})

    async def answer(
        self,
        question: str | None,
        source_filter: str | None = None,
        protocol: AnswerProtocol | None = None,
    ) -> AsyncIterator[bytes]:
        """
        Answer a question from stored documents.

        Args:
            question: User question
            source_filter: Restrict context to chunks of this source
            protocol: Wire format override for this answer

        Returns:
            AsyncIterator[bytes]: Answer text followed by the citation payload

        Raises:
            InvalidParameterError: When the question is missing or blank
            EmbeddingServiceError: When the question cannot be embedded
            StoreError: When retrieval fails
            NoRelevantContextError: When no chunk clears the similarity threshold
        """
        self._stage("Validating")
        if not question or not isinstance(question, str) or not question.strip():
            raise InvalidParameterError("Missing or invalid question", field="question")

        self._stage("EmbeddingQuestion", question_len=len(question))
        vector = await self.embedding_client.embed(question)

        self._stage("QueryingStore", source_filter=source_filter)
        matches = await self.vector_store.query(vector, source_filter=source_filter)
        if not matches:
            self._stage("NoMatches", source_filter=source_filter)
            raise NoRelevantContextError(source_filter=source_filter)

        self._stage("BuildingPrompt", match_count=len(matches))
        prompt = build_prompt(question, matches)

        self._stage("Streaming")
        tokens = self.generation_client.stream_chat(prompt.system, prompt.user)
        return stream_answer(
            tokens,
            matches,
            protocol=protocol or self.protocol,
            timeout_seconds=self.generation_timeout_seconds,
        )
