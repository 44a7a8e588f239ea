"""
Answer stream protocol constants.

Defines the two wire formats an answer can be streamed in:
- marker: answer text, then "\n__SOURCES__" and a JSON citation array
- framed: length-prefixed frames, text frames first and one citations frame last

Dependencies: None
System role: Streaming protocol schemas
"""

from enum import Enum

SOURCE_MARKER = "__SOURCES__"

# kind (1 byte) + payload length (4 bytes, big-endian)
FRAME_HEADER_SIZE = 5


class AnswerProtocol(str, Enum):
    """Wire format of the answer byte stream."""

    MARKER = "marker"
    FRAMED = "framed"


class FrameKind(bytes, Enum):
    """Frame type identifiers for the framed protocol."""

    TEXT = b"T"
    CITATIONS = b"C"


MEDIA_TYPES = {
    AnswerProtocol.MARKER: "text/plain; charset=utf-8",
    AnswerProtocol.FRAMED: "application/octet-stream",
}
