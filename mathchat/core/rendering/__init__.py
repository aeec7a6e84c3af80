"""
Mixed-content rendering: segment parsing, diagram sanitizing, incremental frames.
"""

from mathchat.core.rendering.diagram_sanitizer import sanitize_diagram
from mathchat.core.rendering.incremental_renderer import (
    IncrementalRenderer,
    RenderFrame,
    RenderedSegment,
    render_segments,
)
from mathchat.core.rendering.segment_parser import Segment, SegmentKind, parse_segments

__all__ = [
    "IncrementalRenderer",
    "RenderFrame",
    "RenderedSegment",
    "Segment",
    "SegmentKind",
    "parse_segments",
    "render_segments",
    "sanitize_diagram",
]
