"""
Generation client.

Streams text increments from a langchain chat model for one system
instruction and one user message.

Dependencies: langchain_core
System role: Generative model adapter
"""

import logging
from collections.abc import AsyncIterator
from contextlib import aclosing
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

logger = logging.getLogger(__name__)


def _content_text(content: Any) -> str:
    """Flatten message chunk content, which providers return as str or list of parts."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


class GenerationClient:
    """Token streaming over a chat model."""

    def __init__(self, model: BaseChatModel) -> None:
        """
        Initialize generation client.

        Args:
            model: langchain chat model supporting astream
        """
        self._model = model

    async def stream_chat(self, system_instruction: str, user_message: str) -> AsyncIterator[str]:
        """
        Stream the model's answer as text increments, in provider order.

        Closing this generator closes the provider stream.

        Args:
            system_instruction: System prompt
            user_message: User message

        Yields:
            str: Non-empty text increments
        """
        messages = [
            SystemMessage(content=system_instruction),
            HumanMessage(content=user_message),
        ]
        logger.debug(
            f"{__name__}:stream_chat - Opening generation stream",
            extra={"user_message_len": len(user_message)},
        )
        async with aclosing(self._model.astream(messages)) as stream:
            async for chunk in stream:
                text = _content_text(chunk.content)
                if text:
                    yield text
