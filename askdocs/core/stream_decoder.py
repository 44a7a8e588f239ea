"""
Consumer-side answer stream decoders.

Incrementally split an answer byte stream into live answer text and the
trailing citation payload, appending into a ChatTurn as bytes arrive.

Dependencies: askdocs.models
System role: Client helper for the streaming response protocol
"""

import codecs
import json
import struct

from askdocs.boundary.vdb.vector_schemas import RetrievedMatch
from askdocs.models.chat import ChatTurn
from askdocs.models.streaming import (
    FRAME_HEADER_SIZE,
    SOURCE_MARKER,
    AnswerProtocol,
    FrameKind,
)


def _parse_citations(payload: str) -> list[RetrievedMatch]:
    items = json.loads(payload or "[]")
    if not isinstance(items, list):
        raise ValueError("Citation payload must be a JSON array")
    return [RetrievedMatch.model_validate(item) for item in items]


class AnswerStreamDecoder:
    """
    Decoder for the marker protocol.

    Text is released to the turn as soon as it cannot be the start of the
    marker; everything after the marker is buffered as the JSON payload.
    """

    def __init__(self, turn: ChatTurn) -> None:
        self.turn = turn
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._pending = ""
        self._payload: list[str] = []
        self._marker_seen = False

    @property
    def marker_seen(self) -> bool:
        """Whether the citation marker has been received."""
        return self._marker_seen

    def feed(self, data: bytes) -> None:
        """Consume the next chunk of the byte stream."""
        self._consume(self._decoder.decode(data))

    def _consume(self, text: str) -> None:
        if self._marker_seen:
            self._payload.append(text)
            return

        self._pending += text
        marker_at = self._pending.find(SOURCE_MARKER)
        if marker_at != -1:
            answer = self._pending[:marker_at]
            if answer.endswith("\n"):
                answer = answer[:-1]
            if answer:
                self.turn.append_text(answer)
            self._payload.append(self._pending[marker_at + len(SOURCE_MARKER):])
            self._pending = ""
            self._marker_seen = True
            return

        # hold back enough characters to cover "\n" plus a partial marker
        safe = len(self._pending) - len(SOURCE_MARKER)
        if safe > 0:
            self.turn.append_text(self._pending[:safe])
            self._pending = self._pending[safe:]

    def close(self) -> ChatTurn:
        """
        Finish decoding at end of stream.

        Without a marker the stream ended abnormally: the partial text stays
        on the turn and no sources are attached.

        Returns:
            ChatTurn: The completed turn

        Raises:
            ValueError: When the citation payload is not a valid JSON array
        """
        self._consume(self._decoder.decode(b"", final=True))
        if not self._marker_seen:
            if self._pending:
                self.turn.append_text(self._pending)
                self._pending = ""
            self.turn.finish(None)
            return self.turn

        self.turn.finish(_parse_citations("".join(self._payload)))
        return self.turn


class FramedStreamDecoder:
    """Decoder for the length-prefixed framed protocol."""

    def __init__(self, turn: ChatTurn) -> None:
        self.turn = turn
        self._buffer = bytearray()
        self._sources: list[RetrievedMatch] | None = None

    @property
    def marker_seen(self) -> bool:
        """Whether the citations frame has been received."""
        return self._sources is not None

    def feed(self, data: bytes) -> None:
        """Consume the next chunk of the byte stream."""
        self._buffer.extend(data)
        while len(self._buffer) >= FRAME_HEADER_SIZE:
            kind = bytes(self._buffer[:1])
            (length,) = struct.unpack(">I", self._buffer[1:FRAME_HEADER_SIZE])
            end = FRAME_HEADER_SIZE + length
            if len(self._buffer) < end:
                return
            payload = bytes(self._buffer[FRAME_HEADER_SIZE:end])
            del self._buffer[:end]

            if kind == FrameKind.TEXT.value:
                self.turn.append_text(payload.decode("utf-8"))
            elif kind == FrameKind.CITATIONS.value:
                if self._sources is not None:
                    raise ValueError("Received more than one citations frame")
                self._sources = _parse_citations(payload.decode("utf-8"))
            else:
                raise ValueError(f"Unknown frame kind: {kind!r}")

    def close(self) -> ChatTurn:
        """
        Finish decoding at end of stream.

        Returns:
            ChatTurn: The completed turn

        Raises:
            ValueError: When the stream ends inside a frame
        """
        if self._buffer:
            raise ValueError(f"Stream ended with {len(self._buffer)} bytes of an incomplete frame")
        self.turn.finish(self._sources)
        return self.turn


def get_decoder(protocol: AnswerProtocol, turn: ChatTurn) -> AnswerStreamDecoder | FramedStreamDecoder:
    """Return the decoder for a protocol."""
    if protocol == AnswerProtocol.FRAMED:
        return FramedStreamDecoder(turn)
    return AnswerStreamDecoder(turn)
