"""
Server-sent event framing helpers.

Inbound (completion service):  data: {"choices": [{"delta": {"content": "..."}}]}
Outbound (UI client):          data: {"content": "..."}
Both streams end with:         data: [DONE]

Dependencies: json, codecs (stdlib)
System role: Wire codec shared by the relay and the client-side renderer
"""

import codecs
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

DATA_FIELD = "data:"
DONE_SENTINEL = "[DONE]"
DONE_FRAME = b"data: [DONE]\n\n"


class SSELineDecoder:
    """
    Incremental bytes-to-lines decoder.

    Network chunks may split a line or a multi-byte UTF-8 character; both
    are carried over to the next feed.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> list[str]:
        """
        Decode a chunk and return the lines it completes.

        Args:
            chunk: Raw bytes from the transport

        Returns:
            list[str]: Complete lines without their terminators
        """
        self._buffer += self._decoder.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return [line.rstrip("\r") for line in lines]

    def flush(self) -> list[str]:
        """Return whatever partial line is left at end of stream."""
        self._buffer += self._decoder.decode(b"", final=True)
        rest, self._buffer = self._buffer, ""
        return [rest.rstrip("\r")] if rest else []


def parse_data_line(line: str) -> str | None:
    """
    Extract the payload of a `data:` line.

    Args:
        line: One event-stream line

    Returns:
        str | None: Payload text, or None for comments, other fields and blank lines
    """
    if not line.startswith(DATA_FIELD):
        return None
    payload = line[len(DATA_FIELD):]
    if payload.startswith(" "):
        payload = payload[1:]
    return payload


def _load_object(payload: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError:
        logger.debug("Dropping malformed event payload", extra={"payload_preview": payload[:100]})
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_upstream_delta(payload: str) -> str | None:
    """
    Pull the text delta out of a completion-service chunk.

    Args:
        payload: JSON payload of one inbound `data:` line

    Returns:
        str | None: choices[0].delta.content, None if absent, empty or malformed
    """
    parsed = _load_object(payload)
    if parsed is None:
        return None
    choices = parsed.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    delta = choices[0].get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) and content else None


def encode_delta(delta: str) -> bytes:
    """Frame one delta for the UI client."""
    return f"data: {json.dumps({'content': delta}, ensure_ascii=False)}\n\n".encode("utf-8")


def decode_client_delta(payload: str) -> str | None:
    """
    Read the delta carried by an outbound frame payload.

    Args:
        payload: JSON payload of one outbound `data:` line

    Returns:
        str | None: The `content` string, None if malformed
    """
    parsed = _load_object(payload)
    if parsed is None:
        return None
    content = parsed.get("content")
    return content if isinstance(content, str) else None
