"""
Stream relay between the completion service and the UI client.

Pulls the upstream event stream one chunk at a time, re-frames every text
delta for the client and accumulates the full reply. When the upstream
ends cleanly the reply is stored as an assistant message before the
terminal [DONE] frame is sent. A failed upstream read aborts the client
stream and stores nothing. If the client goes away mid-stream, whatever
was accumulated so far is still stored.

States: IDLE -> FORWARDING -> FINALIZING -> CLOSED, FORWARDING -> ERRORED.

Dependencies: anyio, mathchat.boundary.store, mathchat.core.streaming.sse
System role: Streaming relay for chat replies
"""

import logging
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Protocol
from uuid import UUID

import anyio

from mathchat.boundary.store.base import ChatStore
from mathchat.core.exceptions import UpstreamStreamError
from mathchat.core.streaming.sse import (
    DONE_FRAME,
    DONE_SENTINEL,
    SSELineDecoder,
    encode_delta,
    extract_upstream_delta,
    parse_data_line,
)
from mathchat.models.chat import MessageRole
from mathchat.models.streaming import RelayState
from mathchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

_TRANSITIONS: dict[RelayState, frozenset[RelayState]] = {
    RelayState.IDLE: frozenset({RelayState.FORWARDING}),
    RelayState.FORWARDING: frozenset({RelayState.FINALIZING, RelayState.ERRORED}),
    RelayState.FINALIZING: frozenset({RelayState.CLOSED}),
    RelayState.CLOSED: frozenset(),
    RelayState.ERRORED: frozenset(),
}


class ByteStream(Protocol):
    """Open upstream response body. httpx.Response satisfies this."""

    def aiter_bytes(self) -> AsyncIterator[bytes]: ...

    async def aclose(self) -> None: ...


class StreamRelay:
    """
    One-shot relay for a single assistant reply.

    Attributes:
        state: Current lifecycle state
        accumulated: Concatenation of all deltas forwarded so far
    """

    def __init__(
        self,
        store: ChatStore,
        conversation_id: UUID,
        upstream: ByteStream,
    ) -> None:
        """
        Initialize relay for a confirmed-successful upstream response.

        Args:
            store: Record store receiving the assistant message
            conversation_id: Conversation the reply belongs to
            upstream: Open streaming response from the completion service
        """
        self.store = store
        self.conversation_id = conversation_id
        self.upstream = upstream
        self.state = RelayState.IDLE
        self.accumulated = ""
        self._persisted = False

    def _transition(self, new_state: RelayState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid relay transition {self.state.value} -> {new_state.value}")
        logger.debug(
            "Relay state change",
            extra={
                "conversation_id": str(self.conversation_id),
                "from_state": self.state.value,
                "to_state": new_state.value,
            },
        )
        self.state = new_state

    def _forward_lines(self, lines: list[str]) -> list[bytes]:
        frames = []
        for line in lines:
            payload = parse_data_line(line)
            # [DONE] is re-sent only after persistence in FINALIZING
            if payload is None or payload == DONE_SENTINEL:
                continue
            delta = extract_upstream_delta(payload)
            if delta:
                self.accumulated += delta
                frames.append(encode_delta(delta))
        return frames

    async def _persist(self) -> bool:
        """Store the accumulated reply once. Failures are logged, never raised."""
        if self._persisted or not self.accumulated:
            return False
        self._persisted = True
        try:
            await self.store.insert_message(
                self.conversation_id,
                MessageRole.ASSISTANT,
                self.accumulated,
            )
            await self.store.update_conversation(
                self.conversation_id,
                updated_at=datetime.now(timezone.utc),
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                "Failed to persist assistant reply",
                e,
                conversation_id=str(self.conversation_id),
                content_length=len(self.accumulated),
            )
            return False
        logger.info(
            "Assistant reply persisted",
            extra={
                "conversation_id": str(self.conversation_id),
                "content_length": len(self.accumulated),
            },
        )
        return True

    async def _close_upstream(self) -> None:
        with anyio.CancelScope(shield=True):
            await self.upstream.aclose()

    async def stream(self) -> AsyncIterator[bytes]:
        """
        Run the relay, yielding outbound event-stream frames.

        Yields:
            bytes: `data: {"content": ...}` frames, then `data: [DONE]`

        Raises:
            UpstreamStreamError: Upstream read failed; nothing is persisted
        """
        self._transition(RelayState.FORWARDING)
        decoder = SSELineDecoder()
        try:
            try:
                async for chunk in self.upstream.aiter_bytes():
                    for frame in self._forward_lines(decoder.feed(chunk)):
                        yield frame
                for frame in self._forward_lines(decoder.flush()):
                    yield frame
            except (GeneratorExit, anyio.get_cancelled_exc_class()):
                logger.warning(
                    "Client disconnected mid-stream, keeping partial reply",
                    extra={
                        "conversation_id": str(self.conversation_id),
                        "content_length": len(self.accumulated),
                    },
                )
                self._transition(RelayState.FINALIZING)
                with anyio.CancelScope(shield=True):
                    await self._persist()
                self._transition(RelayState.CLOSED)
                raise
            except Exception as e:
                self._transition(RelayState.ERRORED)
                log_exception_with_context(
                    logger,
                    "Upstream stream read failed",
                    e,
                    conversation_id=str(self.conversation_id),
                    discarded_length=len(self.accumulated),
                )
                raise UpstreamStreamError(
                    "Upstream stream read failed",
                    {"conversation_id": str(self.conversation_id)},
                ) from e

            self._transition(RelayState.FINALIZING)
            # A disconnect arriving mid-insert must not cancel the write
            with anyio.CancelScope(shield=True):
                await self._persist()
            yield DONE_FRAME
            self._transition(RelayState.CLOSED)
        finally:
            await self._close_upstream()
