"""
OpenRouter chat-completion client.

Uses the OpenAI-compatible /chat/completions endpoint:
- URL: {base_url}/chat/completions
- Auth: Authorization: Bearer <api_key>
- Attribution: HTTP-Referer and X-Title headers

Dependencies: httpx, mathchat.configs
System role: Upstream LLM adapter for streamed replies and title generation
"""

import json
import logging
from typing import Any

import httpx

from mathchat.configs.openrouter import OpenRouterSettings
from mathchat.core.exceptions import UpstreamUnavailableError
from mathchat.models.settings import ModelOptions

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "OpenRouter API error"
TRANSPORT_ERROR_STATUS = 502


def _error_message(body: bytes) -> str:
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return FALLBACK_ERROR_MESSAGE
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    return FALLBACK_ERROR_MESSAGE


def _error_status(status_code: int) -> int:
    # Redirects and other non-error statuses are reported as a bad gateway
    return status_code if status_code >= 400 else TRANSPORT_ERROR_STATUS


class OpenRouterClient:
    """
    Async client for the OpenRouter API.

    Wraps one shared httpx.AsyncClient. The API key is per user and passed
    on every call rather than held by the client.
    """

    def __init__(
        self,
        settings: OpenRouterSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            settings: OpenRouter configuration
            http_client: Preconfigured client (tests pass one with a MockTransport)
        """
        self.settings = settings
        self.http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout),
        )

    def _headers(self, api_key: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.app_url,
            "X-Title": self.settings.app_title,
        }

    def _url(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/chat/completions"

    async def open_stream(
        self,
        api_key: str,
        model: str,
        messages: list[dict[str, str]],
        options: ModelOptions,
    ) -> httpx.Response:
        """
        Start a streamed completion.

        Args:
            api_key: User's OpenRouter key
            model: Model id
            messages: Chat messages in {"role", "content"} form
            options: Sampling options

        Returns:
            httpx.Response: Open response whose body is the event stream

        Raises:
            UpstreamUnavailableError: Non-2xx status, or no response at all (502)
        """
        payload: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "stream": True,
            **options.model_dump(exclude_none=True),
        }
        request = self.http_client.build_request(
            "POST",
            self._url(),
            json=payload,
            headers=self._headers(api_key),
        )
        try:
            response = await self.http_client.send(request, stream=True)
        except httpx.RequestError as e:
            logger.error(
                "OpenRouter request failed",
                extra={"model": model, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise UpstreamUnavailableError(FALLBACK_ERROR_MESSAGE, TRANSPORT_ERROR_STATUS) from e

        if not response.is_success:
            try:
                body = await response.aread()
            finally:
                await response.aclose()
            message = _error_message(body)
            logger.warning(
                "OpenRouter rejected stream request",
                extra={"model": model, "status_code": response.status_code, "error_msg": message},
            )
            raise UpstreamUnavailableError(message, _error_status(response.status_code))

        logger.info(
            "OpenRouter stream opened",
            extra={"model": model, "message_count": len(messages)},
        )
        return response

    async def complete(
        self,
        api_key: str,
        model: str,
        messages: list[dict[str, str]],
        max_tokens: int | None = None,
    ) -> str:
        """
        Run a non-streamed completion and return the first choice's text.

        Raises:
            UpstreamUnavailableError: Non-2xx status or transport failure
        """
        payload: dict[str, Any] = {"model": model, "messages": messages}
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        try:
            response = await self.http_client.post(
                self._url(),
                json=payload,
                headers=self._headers(api_key),
            )
        except httpx.RequestError as e:
            raise UpstreamUnavailableError(FALLBACK_ERROR_MESSAGE, TRANSPORT_ERROR_STATUS) from e

        if not response.is_success:
            raise UpstreamUnavailableError(
                _error_message(response.content),
                _error_status(response.status_code),
            )

        data = response.json()
        choices = data.get("choices") or []
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return message.get("content") or ""

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()
