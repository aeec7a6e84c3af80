"""
Standalone diagram document.

Wraps sanitized TikZ source into a self-contained HTML page that loads
TikZJax, fits the SVG to its frame and posts the measured height to the
parent window as {"type": "tikzjax:height", "height": <px>}.

Dependencies: json (stdlib), pydantic
System role: Diagram rendering surface
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from mathchat.models.streaming import DiagramHeightMessage

logger = logging.getLogger(__name__)

MIN_DIAGRAM_HEIGHT = 160
HEIGHT_MESSAGE_TYPE = "tikzjax:height"

_SCRIPT_CLOSE_RE = re.compile(r"</script>", re.IGNORECASE)

_DOCUMENT_TEMPLATE = r"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8" />
  <link rel="stylesheet" href="https://tikzjax.com/v1/fonts.css" />
  <style>
    body { margin: 0; padding: 0; width: 100%; }
    body > div { width: 100% !important; height: auto !important; display: block !important; }
    .page { width: 100% !important; height: auto !important; }
    svg { max-width: 100%; height: auto; display: block; }
  </style>
</head>
<body>
  <script type="text/tikz">%SOURCE%</script>
  <script src="https://tikzjax.com/v1/tikzjax.js"></script>
  <script>
    const targetOrigin = %ORIGIN%;
    const padding = 4;
    const updateLayout = () => {
      const svg = document.querySelector('svg');
      if (svg && typeof svg.getBBox === 'function') {
        try {
          const box = svg.getBBox();
          const width = box.width + padding * 2;
          const height = box.height + padding * 2;
          svg.setAttribute('viewBox', (box.x - padding) + ' ' + (box.y - padding) + ' ' + width + ' ' + height);
          svg.setAttribute('preserveAspectRatio', 'xMinYMin meet');

          const containerWidth = document.body.clientWidth || window.innerWidth || width;
          const aspectRatio = height / Math.max(width, 1);
          let maxScale = 2.0;
          let minWidthRatio = 0.4;
          if (aspectRatio > 0.7) {
            maxScale = 1.75;
            minWidthRatio = 0.34;
          } else if (aspectRatio > 0.4) {
            maxScale = 2.5;
            minWidthRatio = 0.5;
          }
          const desiredWidth = Math.max(width * maxScale, containerWidth * minWidthRatio);
          svg.style.width = Math.min(containerWidth, desiredWidth) + 'px';
          svg.style.height = 'auto';
          svg.style.maxWidth = '100%';
          svg.style.position = 'relative';
          svg.style.left = '50%';
          svg.style.transform = 'translateX(-50%)';
          svg.removeAttribute('width');
          svg.removeAttribute('height');
        } catch (error) {
          // layout is best effort, the height report below still runs
        }
      }
      const svgRect = svg ? svg.getBoundingClientRect() : null;
      const height = ((svgRect && svgRect.height) || document.body.scrollHeight || document.documentElement.scrollHeight || 0) + padding;
      window.parent.postMessage({ type: %MESSAGE_TYPE%, height }, targetOrigin);
    };
    new MutationObserver(updateLayout).observe(document.body, { childList: true, subtree: true });
    window.addEventListener('load', () => {
      updateLayout();
      setTimeout(updateLayout, 500);
      setTimeout(updateLayout, 1500);
    });
  </script>
</body>
</html>
"""


def build_diagram_document(source: str, origin: str = "") -> str:
    """
    Build the HTML document for one sanitized diagram.

    Args:
        source: Sanitized TikZ source
        origin: Parent window origin for postMessage; '*' when empty

    Returns:
        str: Complete HTML document
    """
    safe_source = _SCRIPT_CLOSE_RE.sub(r"<\\/script>", source)
    return (
        _DOCUMENT_TEMPLATE
        .replace("%ORIGIN%", json.dumps(origin or "*"))
        .replace("%MESSAGE_TYPE%", json.dumps(HEIGHT_MESSAGE_TYPE))
        .replace("%SOURCE%", safe_source)
    )


def resolve_frame_height(message: Any, current: float = MIN_DIAGRAM_HEIGHT) -> float:
    """
    Apply a message received from a diagram frame.

    Args:
        message: Data of the received cross-window message
        current: Height currently applied to the frame

    Returns:
        float: New height, clamped to MIN_DIAGRAM_HEIGHT; `current` for unrecognized messages
    """
    if not isinstance(message, Mapping):
        return current
    try:
        parsed = DiagramHeightMessage.model_validate(message)
    except ValidationError:
        logger.debug("Ignoring unrecognized frame message", extra={"message_keys": list(message)})
        return current
    return max(parsed.height, MIN_DIAGRAM_HEIGHT)
