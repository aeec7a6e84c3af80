"""
Segment parser for mixed prose/diagram documents.

Splits a model reply into ordered prose and diagram segments. Diagrams are
found either as ```tikz fenced blocks or as raw tikzcd/tikzpicture
environments; everything else is prose (markdown with inline/display math).

Dependencies: re (stdlib)
System role: First stage of message rendering
"""

import re
from dataclasses import dataclass
from enum import Enum


class SegmentKind(str, Enum):
    """Rendering path for a segment."""

    PROSE = "prose"
    DIAGRAM = "diagram"


@dataclass(frozen=True)
class Segment:
    """A contiguous span of a document destined for one rendering path."""

    kind: SegmentKind
    text: str


@dataclass(frozen=True)
class _Span:
    start: int
    end: int
    inner: str


FENCED_DIAGRAM_RE = re.compile(r"```tikz\s*\n(.*?)```", re.IGNORECASE | re.DOTALL)
RAW_DIAGRAM_RE = re.compile(
    r"\\begin\{tikz(?:cd|picture)\}.*?\\end\{tikz(?:cd|picture)\}",
    re.DOTALL,
)

# Display-math wrappers left dangling once the diagram between them is cut out.
_TRAILING_OPEN_WRAPPER_RE = re.compile(r"(?:\$\$|\\\[)\s*\Z")
# A lone closing wrapper on its own line right after a diagram. Never matches
# "$$x$$"-style inline math because the token must end its line.
_LEADING_CLOSE_WRAPPER_RE = re.compile(r"(?:\s*\n)?[ \t]*(?:\$\$|\\\])[ \t]*(?:\r?\n|\Z)")


def _find_diagram_spans(document: str) -> list[_Span]:
    fenced = [
        _Span(m.start(), m.end(), m.group(1))
        for m in FENCED_DIAGRAM_RE.finditer(document)
    ]
    spans = list(fenced)
    for match in RAW_DIAGRAM_RE.finditer(document):
        start = match.start()
        if any(span.start <= start < span.end for span in fenced):
            continue
        spans.append(_Span(start, match.end(), match.group(0)))
    # Fenced spans were appended first, so the stable sort keeps them ahead on ties.
    spans.sort(key=lambda span: span.start)
    return spans


def parse_segments(document: str) -> list[Segment]:
    """
    Split a document into ordered prose and diagram segments.

    Display-math wrappers ($$ or \\[ ... \\]) that only served to enclose a
    diagram are dropped so they do not render as orphaned tokens. Blank prose
    between diagrams is omitted.

    Args:
        document: Full message text

    Returns:
        list[Segment]: Segments in document order; empty for an empty document
    """
    if not document:
        return []

    spans = _find_diagram_spans(document)
    if not spans:
        return [Segment(SegmentKind.PROSE, document)]

    segments: list[Segment] = []
    cursor = 0
    for span in spans:
        if span.start < cursor:
            # Overlaps a span already emitted
            continue

        before = _TRAILING_OPEN_WRAPPER_RE.sub("", document[cursor:span.start])
        if before.strip():
            segments.append(Segment(SegmentKind.PROSE, before))

        segments.append(Segment(SegmentKind.DIAGRAM, span.inner))
        cursor = span.end

        closing = _LEADING_CLOSE_WRAPPER_RE.match(document[cursor:])
        if closing:
            cursor += closing.end()

    tail = document[cursor:]
    if tail.strip():
        segments.append(Segment(SegmentKind.PROSE, tail))

    return segments
