"""
Diagram sanitizer.

Normalizes TikZ/tikz-cd source into the subset the in-browser TikZJax
engine accepts: Latin-1 only, no environment options, cd library and a
uniform scale directive up front. Non-Latin labels are dropped; diagrams
cannot carry them.

Dependencies: re (stdlib)
System role: Second stage of message rendering (diagram path only)
"""

import re

LIBRARY_DIRECTIVE = r"\usetikzlibrary{cd}"
SCALE_DIRECTIVE = r"\tikzset{every picture/.style={scale=1.0}, every node/.style={transform shape}}"

_CD_MARKER = r"\begin{tikzcd}"

_LEADING_DIRECTIVES_RE = re.compile(
    r"\A(?:\s*(?:" + re.escape(LIBRARY_DIRECTIVE) + "|" + re.escape(SCALE_DIRECTIVE) + r"))+\s*"
)
_TEXT_MACRO_RE = re.compile(r"\\text\{([^}]*)\}")
_EMPTY_TEXT_MACRO_RE = re.compile(r"\\text\{\s*\}")
_NON_LATIN1_RE = re.compile(r"[^\x00-\xFF]")
_ENV_OPTIONS_RE = re.compile(r"\\begin\{(tikzcd|tikzpicture)\}(?:\[[^\]]*?\])+")
_QUAD_RE = re.compile(r"\\quad")
_WHITESPACE_RE = re.compile(r"\s+")


def _transliterate_text_macro(match: re.Match) -> str:
    latin = _NON_LATIN1_RE.sub("", match.group(1))
    return rf"\mathrm{{{latin}}}" if latin else ""


def _clean_body(text: str) -> str:
    text = _TEXT_MACRO_RE.sub(_transliterate_text_macro, text)
    text = _NON_LATIN1_RE.sub("", text)
    text = _EMPTY_TEXT_MACRO_RE.sub("", text)
    text = _ENV_OPTIONS_RE.sub(r"\\begin{\1}", text)
    text = _QUAD_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def sanitize_diagram(raw: str) -> str:
    """
    Rewrite diagram source into renderer-safe form.

    Steps: drop stray ``` fences, turn \\text{...} labels into \\mathrm{...}
    keeping only Latin-1 characters, strip every other non-Latin-1
    character, remove environment options and \\quad, collapse whitespace,
    then put the cd library directive (tikz-cd only) and the scale
    directive in front.

    Total and deterministic. Directives already heading the input are
    recognised and not repeated, so the function is idempotent.

    Args:
        raw: Diagram source as cut out of a message

    Returns:
        str: Single-line sanitized source, empty when nothing is left
    """
    body = _clean_body(raw.replace("```", "").strip())
    body = _LEADING_DIRECTIVES_RE.sub("", body)
    if not body:
        return ""

    if _CD_MARKER in body:
        return f"{LIBRARY_DIRECTIVE} {SCALE_DIRECTIVE} {body}"
    return f"{SCALE_DIRECTIVE} {body}"
