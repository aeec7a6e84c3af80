"""
Event-stream framing and the upstream-to-client stream relay.
"""

from mathchat.core.streaming.relay import ByteStream, StreamRelay
from mathchat.core.streaming.sse import (
    DONE_FRAME,
    DONE_SENTINEL,
    SSELineDecoder,
    encode_delta,
    extract_upstream_delta,
    parse_data_line,
)

__all__ = [
    "ByteStream",
    "DONE_FRAME",
    "DONE_SENTINEL",
    "SSELineDecoder",
    "StreamRelay",
    "encode_delta",
    "extract_upstream_delta",
    "parse_data_line",
]
