"""
Log-safe rendering of structured context.

Chat logs carry conversation ids, content lengths and occasionally user
settings. Values passed through `extra=` are flattened to short strings
here, and anything keyed like a credential is masked before it reaches a
handler.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_VALUE_LENGTH = 200
REDACTED = "***"

_SECRET_KEY_MARKERS = ("api_key", "authorization", "token")


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Flatten a context value into a bounded string.

    Collections are summarized by size rather than dumped, so a message
    history or a settings payload never lands in the log verbatim.

    Args:
        value: Value to render
        max_length: Length after which the rendering is cut

    Returns:
        str: Log-safe rendering
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    try:
        text = value if isinstance(value, str) else str(value)
    except Exception as e:
        return f"<unrenderable {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... ({len(text)} chars)"
    return text


def _is_secret(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in _SECRET_KEY_MARKERS)


def safe_log_context(context: dict[str, Any]) -> dict[str, str]:
    """Render every context value, masking credential-like keys."""
    return {
        key: REDACTED if _is_secret(key) and value else safe_log_value(value)
        for key, value in context.items()
    }


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception at ERROR with its traceback and rendered context.

    Args:
        logger: Module logger
        message: Log message
        exc: Exception being reported
        **context: Context such as conversation_id or operation
    """
    extra = safe_log_context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
