"""
Answer streamer.

Drives a generation token stream and relays it as bytes, then appends the
citation payload once generation completes. Two wire formats are supported:

marker (compatible with existing clients):
    <text>...<text>\n__SOURCES__[{"content": ..., "metadata": ..., "similarity": ...}]

framed:
    [b"T"][len:4][utf-8 text] ... [b"C"][len:4][json citations]

If the consumer stops reading, the upstream token stream is closed and no
citation payload is produced. Upstream failures end the byte stream with
GenerationStreamError.

Dependencies: askdocs.models.streaming, askdocs.boundary.vdb
System role: Streaming response protocol
"""

import asyncio
import json
import logging
import struct
from collections.abc import AsyncIterator

from askdocs.boundary.vdb.vector_schemas import RetrievedMatch
from askdocs.core.exceptions import GenerationStreamError
from askdocs.models.streaming import SOURCE_MARKER, AnswerProtocol, FrameKind

logger = logging.getLogger(__name__)


def _frame(kind: FrameKind, payload: bytes) -> bytes:
    return kind.value + struct.pack(">I", len(payload)) + payload


def citations_json(matches: list[RetrievedMatch]) -> str:
    """Serialize matches as the JSON citation array."""
    return json.dumps(
        [match.model_dump(mode="json") for match in matches],
        ensure_ascii=False,
    )


def encode_text(text: str, protocol: AnswerProtocol) -> bytes:
    """Encode one answer text increment."""
    payload = text.encode("utf-8")
    if protocol == AnswerProtocol.FRAMED:
        return _frame(FrameKind.TEXT, payload)
    return payload


def encode_citations(matches: list[RetrievedMatch], protocol: AnswerProtocol) -> bytes:
    """Encode the trailing citation payload."""
    payload = citations_json(matches).encode("utf-8")
    if protocol == AnswerProtocol.FRAMED:
        return _frame(FrameKind.CITATIONS, payload)
    return f"\n{SOURCE_MARKER}".encode("utf-8") + payload


async def _close_upstream(tokens: AsyncIterator[str]) -> None:
    aclose = getattr(tokens, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as e:
        logger.warning(
            f"{__name__}:_close_upstream - Failed to close generation stream",
            extra={"error_type": type(e).__name__, "error_msg": str(e)},
        )


async def stream_answer(
    tokens: AsyncIterator[str],
    matches: list[RetrievedMatch],
    protocol: AnswerProtocol = AnswerProtocol.MARKER,
    timeout_seconds: float | None = None,
) -> AsyncIterator[bytes]:
    """
    Relay generated text increments and append citations.

    Args:
        tokens: Upstream generation stream of text increments
        matches: Matches used as context, emitted as citations
        protocol: Wire format of the byte stream
        timeout_seconds: Deadline for the whole generation stream

    Yields:
        bytes: Encoded text increments, then the citation payload

    Raises:
        GenerationStreamError: When the upstream fails or exceeds the deadline
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_seconds if timeout_seconds else None
    token_count = 0

    try:
        while True:
            try:
                if deadline is None:
                    text = await tokens.__anext__()
                else:
                    remaining = deadline - loop.time()
                    if remaining <= 0:
                        raise asyncio.TimeoutError()
                    text = await asyncio.wait_for(tokens.__anext__(), remaining)
            except StopAsyncIteration:
                break
            except asyncio.TimeoutError as e:
                logger.error(
                    f"{__name__}:stream_answer - Generation exceeded {timeout_seconds}s deadline",
                    extra={"token_count": token_count},
                )
                raise GenerationStreamError(
                    f"Generation exceeded {timeout_seconds}s deadline",
                    details={"token_count": token_count},
                ) from e
            except Exception as e:
                logger.error(
                    f"{__name__}:stream_answer - Generation stream failed: {type(e).__name__}: {e}",
                    extra={"token_count": token_count},
                )
                raise GenerationStreamError(
                    f"Generation stream failed: {e}",
                    details={"token_count": token_count},
                ) from e

            if not text:
                continue
            token_count += 1
            yield encode_text(text, protocol)

        logger.info(
            f"{__name__}:stream_answer - Generation complete, emitting {len(matches)} citations",
            extra={"token_count": token_count, "protocol": protocol.value},
        )
        yield encode_citations(matches, protocol)
    finally:
        await _close_upstream(tokens)
