"""
Test suite for consumer-side answer stream decoders.

Feeds encoded answer streams in arbitrary slices and checks the resulting
chat turn.

System role: Verification of client-side stream parsing
"""

import json
import struct

import pytest

from askdocs.boundary.vdb.vector_schemas import RetrievedMatch
from askdocs.core.answer_stream import stream_answer
from askdocs.core.stream_decoder import (
    AnswerStreamDecoder,
    FramedStreamDecoder,
    get_decoder,
)
from askdocs.models.chat import ChatRole, ChatTurn
from askdocs.models.streaming import AnswerProtocol

CITATIONS = [
    {"content": "Foxes are quick.", "metadata": {"source": "fox.txt"}, "similarity": 0.88},
]


def marker_body(text: str, citations=CITATIONS) -> bytes:
    return (text + "\n__SOURCES__" + json.dumps(citations)).encode("utf-8")


def frame(kind: bytes, payload: bytes) -> bytes:
    return kind + struct.pack(">I", len(payload)) + payload


@pytest.fixture
def turn():
    """Fresh assistant turn."""
    return ChatTurn(role=ChatRole.ASSISTANT)


class TestAnswerStreamDecoder:
    """Test suite for the marker protocol decoder."""

    @pytest.mark.parametrize("slice_size", [1, 3, 7, 1024])
    def test_should_split_text_and_citations_for_any_slicing(self, turn, slice_size: int) -> None:
        """Test decoding is independent of how bytes are sliced."""
        # Arrange
        body = marker_body("Voilà, the fox ☕ is quick.")
        decoder = AnswerStreamDecoder(turn)

        # Act
        for start in range(0, len(body), slice_size):
            decoder.feed(body[start:start + slice_size])
        result = decoder.close()

        # Assert
        assert result.content == "Voilà, the fox ☕ is quick."
        assert result.complete
        assert [source.content for source in result.sources] == ["Foxes are quick."]
        assert result.sources[0].metadata == {"source": "fox.txt"}

    def test_should_strip_only_the_separator_newline(self, turn) -> None:
        """Test answer text keeps its own trailing newlines."""
        # Arrange
        decoder = AnswerStreamDecoder(turn)

        # Act
        decoder.feed(marker_body("line one\n"))
        decoder.close()

        # Assert
        assert turn.content == "line one\n"

    def test_text_should_be_released_before_marker_arrives(self, turn) -> None:
        """Test text far enough from a possible marker is appended immediately."""
        # Arrange
        decoder = AnswerStreamDecoder(turn)

        # Act
        decoder.feed(b"A long enough answer fragment")

        # Assert
        assert turn.content.startswith("A long enough")
        assert not decoder.marker_seen

    def test_missing_marker_should_finish_without_sources(self, turn) -> None:
        """Test an abnormally terminated stream keeps partial text and no citations."""
        # Arrange
        decoder = AnswerStreamDecoder(turn)

        # Act
        decoder.feed(b"partial answer")
        decoder.close()

        # Assert
        assert turn.content == "partial answer"
        assert turn.sources is None
        assert turn.complete

    def test_invalid_payload_should_raise(self, turn) -> None:
        """Test a non-array citation payload is rejected."""
        # Arrange
        decoder = AnswerStreamDecoder(turn)
        decoder.feed(b"answer\n__SOURCES__{\"not\": \"a list\"}")

        # Act & Assert
        with pytest.raises(ValueError):
            decoder.close()


class TestFramedStreamDecoder:
    """Test suite for the framed protocol decoder."""

    def test_should_decode_text_and_citations_frames(self, turn) -> None:
        """Test text containing the marker string is kept verbatim."""
        # Arrange
        body = (
            frame(b"T", "Use \n__SOURCES__ literally".encode("utf-8"))
            + frame(b"C", json.dumps(CITATIONS).encode("utf-8"))
        )
        decoder = FramedStreamDecoder(turn)

        # Act
        for byte in body:
            decoder.feed(bytes([byte]))
        decoder.close()

        # Assert
        assert turn.content == "Use \n__SOURCES__ literally"
        assert len(turn.sources) == 1

    def test_unknown_frame_kind_should_raise(self, turn) -> None:
        """Test unknown frame kinds are rejected."""
        decoder = FramedStreamDecoder(turn)

        with pytest.raises(ValueError, match="Unknown frame kind"):
            decoder.feed(frame(b"X", b"data"))

    def test_second_citations_frame_should_raise(self, turn) -> None:
        """Test only one citations frame is accepted."""
        decoder = FramedStreamDecoder(turn)
        decoder.feed(frame(b"C", b"[]"))

        with pytest.raises(ValueError, match="more than one"):
            decoder.feed(frame(b"C", b"[]"))

    def test_truncated_frame_should_raise_on_close(self, turn) -> None:
        """Test a stream ending inside a frame is reported."""
        decoder = FramedStreamDecoder(turn)
        decoder.feed(frame(b"T", b"hello")[:-2])

        with pytest.raises(ValueError, match="incomplete frame"):
            decoder.close()


class TestDecodeEncodedStream:
    """Test suite decoding the streamer's own output."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("protocol", [AnswerProtocol.MARKER, AnswerProtocol.FRAMED])
    async def test_decoder_should_rebuild_turn_from_streamer(self, turn, protocol) -> None:
        """Test streamer output decodes into the generated text and the matches."""
        # Arrange
        matches = [RetrievedMatch(content="ctx", metadata={"source": "a.txt"}, similarity=0.8)]

        async def tokens():
            for token in ["The ", "answer", "."]:
                yield token

        decoder = get_decoder(protocol, turn)

        # Act
        async for data in stream_answer(tokens(), matches, protocol=protocol):
            decoder.feed(data)
        decoder.close()

        # Assert
        assert turn.content == "The answer."
        assert turn.sources == matches


class TestChatTurn:
    """Test suite for ChatTurn append-only behavior."""

    def test_complete_turn_should_reject_appends(self, turn) -> None:
        """Test a finished turn cannot be modified."""
        turn.append_text("done")
        turn.finish([])

        with pytest.raises(ValueError):
            turn.append_text("more")
        with pytest.raises(ValueError):
            turn.finish(None)
