"""
Render API endpoints.

Routes:
- POST /render/segments - Split a document into keyed prose/diagram segments
- POST /render/diagram - Standalone HTML document for one diagram

Dependencies: mathchat.core.rendering
System role: Server-side rendering helpers for clients
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from mathchat.core.rendering import render_segments, sanitize_diagram
from mathchat.core.rendering.diagram_document import build_diagram_document
from mathchat.models.render import (
    DiagramDocumentRequest,
    RenderedSegmentResponse,
    RenderRequest,
    RenderResponse,
)

router = APIRouter(prefix="/render", tags=["render"])


@router.post("/segments", response_model=RenderResponse)
async def render_document(request: RenderRequest) -> RenderResponse:
    """Segment a document; diagram texts come back sanitized."""
    segments = render_segments(request.content)
    return RenderResponse(
        segments=[
            RenderedSegmentResponse(key=s.key, kind=s.kind.value, text=s.text)
            for s in segments
        ]
    )


@router.post("/diagram", response_class=HTMLResponse)
async def render_diagram(request: DiagramDocumentRequest) -> HTMLResponse:
    """Wrap sanitized diagram source into its self-measuring HTML document."""
    return HTMLResponse(build_diagram_document(sanitize_diagram(request.source), request.origin))
