"""
Render endpoint schemas.

Dependencies: pydantic
System role: Render API contracts
"""

from typing import Literal

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    """Document to segment and sanitize."""

    content: str = Field(description="Raw message text (markdown, math, diagrams)")


class RenderedSegmentResponse(BaseModel):
    """One keyed segment ready for display."""

    key: str
    kind: Literal["prose", "diagram"]
    text: str


class RenderResponse(BaseModel):
    """Ordered segments of a document."""

    segments: list[RenderedSegmentResponse]


class DiagramDocumentRequest(BaseModel):
    """Diagram source to wrap into a standalone document."""

    source: str
    origin: str = Field(default="", description="Parent origin for height messages; '*' when empty")
