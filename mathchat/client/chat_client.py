"""
Chat stream client.

Posts a message to the chat API and turns the reply's event stream into
successive render frames through the IncrementalRenderer.

Dependencies: httpx, mathchat.core.rendering
System role: Reference consumer of the outbound event stream
"""

import logging
from collections.abc import AsyncIterator
from uuid import UUID

import httpx

from mathchat.core.rendering.incremental_renderer import IncrementalRenderer, RenderFrame

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class ChatStreamClient:
    """
    Minimal API client for streamed chat replies.

    Usage:
        async with httpx.AsyncClient(base_url="http://localhost:8000") as http:
            client = ChatStreamClient(http, user_id="user-1")
            async for frame in client.send_message(conversation_id, "Explain limits"):
                print(frame.segments)
    """

    def __init__(self, http_client: httpx.AsyncClient, user_id: str) -> None:
        """
        Initialize client.

        Args:
            http_client: Client whose base_url points at the API server
            user_id: Identity sent as X-User-ID
        """
        self.http_client = http_client
        self.user_id = user_id

    async def send_message(
        self,
        conversation_id: UUID,
        content: str,
    ) -> AsyncIterator[RenderFrame]:
        """
        Send a message and yield a frame for every change in the reply.

        The last frame has streaming=False once [DONE] arrives. A reply that
        broke off upstream never gets that frame.

        Args:
            conversation_id: Target conversation
            content: User message text

        Yields:
            RenderFrame: Snapshot of the reply so far

        Raises:
            httpx.HTTPStatusError: API answered with an error status
        """
        renderer = IncrementalRenderer()
        async with self.http_client.stream(
            "POST",
            f"{API_PREFIX}/conversations/{conversation_id}/messages",
            json={"content": content},
            headers={"X-User-ID": self.user_id},
        ) as response:
            if response.is_error:
                await response.aread()
                response.raise_for_status()

            async for chunk in response.aiter_bytes():
                frame = renderer.feed(chunk)
                if frame is not None:
                    yield frame
            frame = renderer.close()
            if frame is not None:
                yield frame

        logger.debug(
            "Reply stream finished",
            extra={
                "conversation_id": str(conversation_id),
                "content_length": len(renderer.content),
                "completed": not renderer.streaming,
            },
        )
