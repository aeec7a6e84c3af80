"""
Message API endpoints.

Routes:
- GET /conversations/{id}/messages - Conversation history
- POST /conversations/{id}/messages - Send message, stream the reply

The reply is an event stream of `data: {"content": "<delta>"}` frames
terminated by `data: [DONE]`.

Dependencies: mathchat.application.services.chat_service
System role: Chat HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from mathchat.api.deps import get_chat_service, get_current_user_id
from mathchat.api.routers.error_handling import handle_chat_errors
from mathchat.application.services.chat_service import ChatService
from mathchat.models.chat import Message, SendMessageRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversations", tags=["messages"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.get("/{conversation_id}/messages", response_model=list[Message])
@handle_chat_errors
async def list_messages(
    conversation_id: UUID,
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> list[Message]:
    """
    Get conversation history, oldest first.

    Raises:
        HTTPException(404): Conversation not found
    """
    return await chat_service.get_history(user_id, conversation_id)


@router.post("/{conversation_id}/messages")
@handle_chat_errors
async def send_message(
    conversation_id: UUID,
    request: SendMessageRequest,
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """
    Send a user message and stream the assistant reply.

    Errors raised before the upstream stream opens are plain JSON errors;
    after that the stream itself carries the outcome.

    Args:
        conversation_id: Conversation UUID
        request: SendMessageRequest with content
        user_id: Caller identity (injected)
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: text/event-stream of reply deltas

    Raises:
        HTTPException(400): Empty content or no API key
        HTTPException(404): Conversation not found
        HTTPException(<upstream status>): Upstream rejected the request
    """
    relay = await chat_service.send_message(user_id, conversation_id, request.content)
    return StreamingResponse(
        relay.stream(),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )
