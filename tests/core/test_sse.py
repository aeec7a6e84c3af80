"""
Test suite for event-stream framing helpers.

System role: Verification of inbound parsing and outbound framing
"""

import pytest

from mathchat.core.streaming.sse import (
    DONE_SENTINEL,
    SSELineDecoder,
    decode_client_delta,
    encode_delta,
    extract_upstream_delta,
    parse_data_line,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("data: [DONE]", DONE_SENTINEL),
        ("data:{}", "{}"),
        ("data:  two spaces", " two spaces"),
        (": comment", None),
        ("event: message", None),
        ("", None),
    ],
)
def test_parse_data_line(line: str, expected: str | None) -> None:
    assert parse_data_line(line) == expected


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ('{"choices": [{"delta": {"content": "x"}}]}', "x"),
        ('{"choices": [{"delta": {"content": ""}}]}', None),
        ('{"choices": [{"delta": {}}]}', None),
        ('{"choices": []}', None),
        ('{"choices": [{"delta": {"content": 5}}]}', None),
        ("[1, 2]", None),
        ("not json", None),
    ],
)
def test_extract_upstream_delta(payload: str, expected: str | None) -> None:
    assert extract_upstream_delta(payload) == expected


def test_encode_delta_keeps_unicode_readable() -> None:
    assert encode_delta("圏 \"x\"\n") == 'data: {"content": "圏 \\"x\\"\\n"}\n\n'.encode("utf-8")


def test_encoded_delta_decodes_back() -> None:
    line = encode_delta("$$a$$").decode("utf-8").split("\n")[0]

    assert decode_client_delta(parse_data_line(line)) == "$$a$$"


def test_line_decoder_carries_partial_lines() -> None:
    decoder = SSELineDecoder()

    assert decoder.feed(b"data: a\r\nda") == ["data: a"]
    assert decoder.feed(b"ta: b\n") == ["data: b"]
    assert decoder.feed(b"tail") == []
    assert decoder.flush() == ["tail"]
    assert decoder.flush() == []
