"""
Incremental renderer for streamed replies.

Every update re-parses the whole accumulated text, because a diagram's
closing delimiter may only arrive in a later chunk. Segments are keyed by
ordinal within their kind (diagram-0, prose-1, ...), so a diagram under
active streaming keeps its key while the prose around it grows.

Dependencies: mathchat.core.rendering, mathchat.core.streaming.sse
System role: Client-side consumer turning event frames into display frames
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from mathchat.core.rendering.diagram_sanitizer import sanitize_diagram
from mathchat.core.rendering.segment_parser import Segment, SegmentKind, parse_segments
from mathchat.core.streaming.sse import (
    DONE_SENTINEL,
    SSELineDecoder,
    decode_client_delta,
    parse_data_line,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedSegment:
    """Segment ready for display, diagrams already sanitized."""

    key: str
    kind: SegmentKind
    text: str


@dataclass(frozen=True)
class RenderFrame:
    """Snapshot of everything to display for one message."""

    content: str
    segments: tuple[RenderedSegment, ...]
    streaming: bool


def render_segments(
    content: str,
    sanitizer: Callable[[str], str] = sanitize_diagram,
) -> tuple[RenderedSegment, ...]:
    """
    Parse and sanitize a full document into keyed segments.

    A sanitizer fault only affects its own diagram, which falls back to a
    fenced source listing; sibling segments render normally.

    Args:
        content: Full message text
        sanitizer: Diagram source transform

    Returns:
        tuple[RenderedSegment, ...]: Keyed segments in document order
    """
    return _key_segments(parse_segments(content), sanitizer)


def _key_segments(
    segments: list[Segment],
    sanitizer: Callable[[str], str],
) -> tuple[RenderedSegment, ...]:
    rendered = []
    counters = {SegmentKind.PROSE: 0, SegmentKind.DIAGRAM: 0}
    for segment in segments:
        ordinal = counters[segment.kind]
        counters[segment.kind] += 1
        key = f"{segment.kind.value}-{ordinal}"

        if segment.kind is SegmentKind.PROSE:
            rendered.append(RenderedSegment(key, SegmentKind.PROSE, segment.text))
            continue

        try:
            text = sanitizer(segment.text)
        except Exception:
            logger.exception("Diagram sanitize failed", extra={"segment_key": key})
            rendered.append(
                RenderedSegment(key, SegmentKind.PROSE, f"```latex\n{segment.text}\n```")
            )
            continue
        rendered.append(RenderedSegment(key, SegmentKind.DIAGRAM, text))
    return tuple(rendered)


class IncrementalRenderer:
    """Accumulates outbound deltas and renders a frame after each one."""

    def __init__(self, sanitizer: Callable[[str], str] = sanitize_diagram) -> None:
        self._sanitizer = sanitizer
        self._cache: dict[str, str] = {}
        self._decoder = SSELineDecoder()
        self.content = ""
        self.streaming = True

    def _sanitize_cached(self, raw: str) -> str:
        # Unchanged diagrams keep identical output across frames
        if raw not in self._cache:
            self._cache[raw] = self._sanitizer(raw)
        return self._cache[raw]

    def render(self) -> RenderFrame:
        """Render the current accumulation buffer."""
        parsed = parse_segments(self.content)
        segments = _key_segments(parsed, self._sanitize_cached)
        live = {seg.text for seg in parsed if seg.kind is SegmentKind.DIAGRAM}
        self._cache = {raw: out for raw, out in self._cache.items() if raw in live}
        return RenderFrame(self.content, segments, self.streaming)

    def apply_delta(self, delta: str) -> RenderFrame:
        """Append one delta and re-render."""
        self.content += delta
        return self.render()

    def feed(self, chunk: bytes) -> RenderFrame | None:
        """
        Consume raw bytes of the outbound event stream.

        Args:
            chunk: Bytes as received from the relay

        Returns:
            RenderFrame | None: New frame if the chunk changed anything
        """
        return self._consume_lines(self._decoder.feed(chunk))

    def close(self) -> RenderFrame | None:
        """Consume any trailing partial line at end of transport."""
        return self._consume_lines(self._decoder.flush())

    def _consume_lines(self, lines: list[str]) -> RenderFrame | None:
        changed = False
        for line in lines:
            payload = parse_data_line(line)
            if payload is None:
                continue
            if payload == DONE_SENTINEL:
                self.streaming = False
                changed = True
                continue
            delta = decode_client_delta(payload)
            if delta:
                self.content += delta
                changed = True
        return self.render() if changed else None

    def finish(self, final_content: str | None = None) -> RenderFrame:
        """
        Mark the reply complete, optionally replacing it with the stored text.

        Args:
            final_content: Persisted message content, if re-fetched

        Returns:
            RenderFrame: Final non-streaming frame
        """
        if final_content is not None:
            self.content = final_content
        self.streaming = False
        return self.render()
