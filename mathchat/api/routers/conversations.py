"""
Conversation API endpoints.

Routes:
- GET /conversations - List the caller's conversations
- POST /conversations - Create conversation
- GET /conversations/search?query= - Search titles and messages
- DELETE /conversations/{id} - Delete conversation and its messages
- POST /conversations/{id}/generate-title - Name conversation from its first messages

Dependencies: mathchat.application.services.conversation_service, mathchat.models
System role: Conversation management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query

from mathchat.api.deps import get_conversation_service, get_current_user_id
from mathchat.api.routers.error_handling import handle_chat_errors
from mathchat.application.services.conversation_service import ConversationService
from mathchat.models.conversation import Conversation, CreateConversationRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=list[Conversation])
@handle_chat_errors
async def list_conversations(
    user_id: str = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> list[Conversation]:
    """List conversations, most recently active first."""
    return await service.list_conversations(user_id)


@router.post("", response_model=Conversation)
@handle_chat_errors
async def create_conversation(
    request: CreateConversationRequest | None = Body(default=None),
    user_id: str = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> Conversation:
    """
    Create a conversation.

    Args:
        request: Optional body with a title
        user_id: Caller identity (injected)
        service: Injected ConversationService

    Returns:
        Conversation: Created conversation
    """
    title = request.title if request else None
    return await service.create_conversation(user_id, title)


@router.get("/search", response_model=list[Conversation])
@handle_chat_errors
async def search_conversations(
    query: str = Query(default=""),
    user_id: str = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> list[Conversation]:
    """Case-insensitive search over titles and message contents."""
    return await service.search_conversations(user_id, query)


@router.delete("/{conversation_id}", status_code=204)
@handle_chat_errors
async def delete_conversation(
    conversation_id: UUID,
    user_id: str = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> None:
    """
    Delete conversation by ID.

    Raises:
        HTTPException(404): Conversation not found
    """
    await service.delete_conversation(user_id, conversation_id)


@router.post("/{conversation_id}/generate-title", response_model=Conversation)
@handle_chat_errors
async def generate_title(
    conversation_id: UUID,
    user_id: str = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> Conversation:
    """
    Generate a short title from the opening messages.

    Raises:
        HTTPException(400): No API key or no messages
        HTTPException(404): Conversation not found
    """
    return await service.generate_title(user_id, conversation_id)
