"""
Chat domain models.

ChatTurn is the consumer-side record of one conversation turn. An assistant
turn is built up append-only while its answer streams in and is frozen once
the citation payload arrives.

Dependencies: pydantic, askdocs.boundary.vdb.vector_schemas
System role: Chat data structures and HTTP contracts
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from askdocs.boundary.vdb.vector_schemas import RetrievedMatch
from askdocs.models.streaming import AnswerProtocol


class ChatRole(str, Enum):
    """Author of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """
    One turn of a conversation.

    Attributes:
        id: Turn identifier
        role: Turn author
        content: Text accumulated so far
        created_at: Creation time (UTC)
        sources: Citation payload, set once when streaming completes
        complete: Whether the turn is frozen
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: ChatRole
    content: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    sources: list[RetrievedMatch] | None = None
    complete: bool = False

    def append_text(self, text: str) -> None:
        """Append a streamed text increment."""
        if self.complete:
            raise ValueError(f"Turn {self.id} is complete and cannot be modified")
        self.content += text

    def finish(self, sources: list[RetrievedMatch] | None = None) -> None:
        """Attach the citation payload and freeze the turn."""
        if self.complete:
            raise ValueError(f"Turn {self.id} is already complete")
        self.sources = sources
        self.complete = True


class RagRequest(BaseModel):
    """Question payload for the answering endpoint."""

    question: Any = Field(default=None, description="Question text, validated by the answering pipeline")
    document_source: str | None = Field(
        default=None,
        description="Restrict answers to chunks from this source",
    )
    protocol: AnswerProtocol | None = Field(
        default=None,
        description="Answer stream protocol (defaults to configured protocol)",
    )
