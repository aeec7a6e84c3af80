"""
Test suite for the segment parser.

System role: Verification of prose/diagram splitting
"""

import pytest

from mathchat.core.rendering.segment_parser import Segment, SegmentKind, parse_segments

PROSE = SegmentKind.PROSE
DIAGRAM = SegmentKind.DIAGRAM


def test_empty_document_has_no_segments() -> None:
    assert parse_segments("") == []


@pytest.mark.parametrize(
    "document",
    [
        "plain text",
        "inline $x^2$ and display $$\\int_0^1 f$$",
        "```python\nprint(1)\n```",
        "an unterminated \\begin{tikzcd} A \\arrow[r] & B",
    ],
)
def test_document_without_diagrams_is_single_prose_segment(document: str) -> None:
    assert parse_segments(document) == [Segment(PROSE, document)]


def test_display_math_wrapped_diagram() -> None:
    document = "before\n$$\n\\begin{tikzcd} A \\arrow[r] & B \\end{tikzcd}\n$$\nafter"

    assert parse_segments(document) == [
        Segment(PROSE, "before\n"),
        Segment(DIAGRAM, "\\begin{tikzcd} A \\arrow[r] & B \\end{tikzcd}"),
        Segment(PROSE, "after"),
    ]


def test_bracket_wrapped_diagram() -> None:
    document = "see\n\\[\n\\begin{tikzpicture}\\draw (0,0) -- (1,1);\\end{tikzpicture}\n\\]\ndone"

    segments = parse_segments(document)

    assert [s.kind for s in segments] == [PROSE, DIAGRAM, PROSE]
    assert segments[0].text == "see\n"
    assert segments[2].text == "done"


def test_fenced_block_yields_inner_text() -> None:
    document = "intro\n```tikz\n\\begin{tikzcd} X \\end{tikzcd}\n```\noutro"

    segments = parse_segments(document)

    assert segments == [
        Segment(PROSE, "intro\n"),
        Segment(DIAGRAM, "\\begin{tikzcd} X \\end{tikzcd}\n"),
        Segment(PROSE, "\noutro"),
    ]


def test_fence_tag_is_case_insensitive() -> None:
    segments = parse_segments("```TikZ\n\\draw (0,0);\n```")

    assert segments == [Segment(DIAGRAM, "\\draw (0,0);\n")]


def test_raw_environment_inside_fence_is_not_duplicated() -> None:
    document = "```tikz\n\\begin{tikzcd} A \\end{tikzcd}\n```"

    segments = parse_segments(document)

    assert len(segments) == 1
    assert segments[0].kind is DIAGRAM


def test_multiple_diagrams_in_document_order() -> None:
    document = (
        "one\n\\begin{tikzcd} A \\end{tikzcd}\ntwo\n"
        "```tikz\n\\draw;\n```\nthree"
    )

    segments = parse_segments(document)

    assert [s.kind for s in segments] == [PROSE, DIAGRAM, PROSE, DIAGRAM, PROSE]
    assert segments[1].text == "\\begin{tikzcd} A \\end{tikzcd}"
    assert segments[3].text == "\\draw;\n"
    assert segments[4].text == "\nthree"


def test_blank_prose_between_diagrams_is_omitted() -> None:
    document = "\\begin{tikzcd} A \\end{tikzcd}\n\n\\begin{tikzcd} B \\end{tikzcd}"

    segments = parse_segments(document)

    assert [s.kind for s in segments] == [DIAGRAM, DIAGRAM]


def test_empty_fenced_diagram_is_kept() -> None:
    segments = parse_segments("```tikz\n```")

    assert segments == [Segment(DIAGRAM, "")]


def test_inline_math_after_diagram_is_not_stripped() -> None:
    document = "\\begin{tikzcd} A \\end{tikzcd} $$x$$ follows"

    segments = parse_segments(document)

    assert segments[-1] == Segment(PROSE, " $$x$$ follows")


def test_closing_wrapper_at_end_of_document_is_consumed() -> None:
    segments = parse_segments("$$\\begin{tikzcd} A \\end{tikzcd}$$")

    assert segments == [Segment(DIAGRAM, "\\begin{tikzcd} A \\end{tikzcd}")]


def test_blank_lines_before_closing_wrapper_are_consumed() -> None:
    document = "$$\n\\begin{tikzcd} A \\end{tikzcd}\n\n$$\nnext"

    assert parse_segments(document) == [
        Segment(DIAGRAM, "\\begin{tikzcd} A \\end{tikzcd}"),
        Segment(PROSE, "next"),
    ]


# Each document is a sequence of (text, dropped) pieces. Dropped pieces are the
# wrapper tokens, fence markers and blank prose the parser leaves out.
RECONSTRUCTION_CASES = {
    "fenced": [
        ("intro\n", False),
        ("```tikz\n", True),
        ("\\begin{tikzcd} X \\arrow[r] & Y \\end{tikzcd}\n", False),
        ("```", True),
        ("\noutro", False),
    ],
    "dollar_wrapped_raw": [
        ("before\n", False),
        ("$$\n", True),
        ("\\begin{tikzcd} A \\arrow[r] & B \\end{tikzcd}", False),
        ("\n$$\n", True),
        ("after", False),
    ],
    "bracket_wrapped_picture": [
        ("see ", False),
        ("\\[ ", True),
        ("\\begin{tikzpicture}\\draw (0,0) -- (1,1);\\end{tikzpicture}", False),
        (" \\]", True),
    ],
    "inline_math_after_diagram": [
        ("\\begin{tikzcd} A \\end{tikzcd}", False),
        (" $$x$$ follows", False),
    ],
    "blank_line_before_closing_wrapper": [
        ("$$\n", True),
        ("\\begin{tikzcd} F \\end{tikzcd}", False),
        ("\n\n$$\n", True),
        ("next $y$", False),
    ],
    "raw_then_fenced_with_blank_prose": [
        ("\\begin{tikzcd} A \\end{tikzcd}", False),
        ("\n\n", True),
        ("```tikz\n", True),
        ("\\draw;\n", False),
        ("```", True),
        ("\nend", False),
    ],
    "no_diagram": [
        ("plain $$x$$ text \\[y\\]", False),
    ],
}


@pytest.mark.parametrize("pieces", list(RECONSTRUCTION_CASES.values()), ids=list(RECONSTRUCTION_CASES))
def test_segments_reassemble_document_minus_dropped_tokens(pieces: list[tuple[str, bool]]) -> None:
    document = "".join(text for text, _ in pieces)
    kept = [text for text, dropped in pieces if not dropped]

    segments = parse_segments(document)

    assert [s.text for s in segments] == kept
