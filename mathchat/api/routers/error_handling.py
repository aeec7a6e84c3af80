"""
Router error handling.

Decorator mapping domain exceptions onto HTTP responses so every endpoint
reports failures the same way.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from mathchat.core.exceptions import (
    ConversationNotFoundError,
    MathChatException,
    MissingApiKeyError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_chat_errors(func: F) -> F:
    """
    Decorator to transform domain errors into HTTPExceptions.

    Mapping:
        ConversationNotFoundError -> 404
        ValidationError, MissingApiKeyError -> 400
        UpstreamUnavailableError -> the upstream's own status code
        any other error -> 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ConversationNotFoundError as e:
            logger.warning("Conversation not found", extra=e.details)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")

        except (ValidationError, MissingApiKeyError) as e:
            logger.warning("Invalid request", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except UpstreamUnavailableError as e:
            logger.warning(
                "Upstream completion service unavailable",
                extra={"status_code": e.status_code, "error": e.message},
            )
            raise HTTPException(status_code=e.status_code, detail=e.message)

        except MathChatException as e:
            logger.error(f"Operation failed in {func.__name__}", exc_info=True, extra=e.details)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Internal server error: {str(e)}",
            )

    return wrapper  # type: ignore
