"""
Conversation Routes - Browse and delete stored chat history.

Endpoints:
- GET    /api/conversations            : Recent conversations
- GET    /api/conversations/{id}       : One conversation with its messages
- DELETE /api/conversations/{id}       : Delete a conversation

Database failures are reported as 503 database_error.
"""
from fastapi import APIRouter, Query
from sqlalchemy.exc import SQLAlchemyError

from src.core.exceptions import DatabaseError
from src.core.logging_config import get_logger
from src.database.conversation_repository import ConversationRepository
from src.models.chat import (
    ConversationHistoryResponse,
    ConversationListResponse,
    ErrorResponse,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/conversations",
    tags=["Conversations"],
    responses={
        404: {"model": ErrorResponse, "description": "Conversation not found"},
        503: {"model": ErrorResponse, "description": "Database unavailable"},
    }
)


@router.get(
    "",
    response_model=ConversationListResponse,
    summary="List Conversations",
    description="List conversations, most recently active first."
)
async def list_conversations(
    limit: int = Query(default=20, ge=1, le=100, description="Maximum conversations to return")
):
    try:
        conversations = ConversationRepository().list_recent(limit=limit)
    except SQLAlchemyError as e:
        logger.error(f"Failed to list conversations: {e}")
        raise DatabaseError("Failed to list conversations") from e

    return ConversationListResponse(conversations=conversations, total=len(conversations))


@router.get(
    "/{conversation_id}",
    response_model=ConversationHistoryResponse,
    summary="Get Conversation History",
    description="Get a conversation's title, timestamps and all of its messages in order."
)
async def get_conversation(conversation_id: str):
    try:
        history = ConversationRepository().get_history(conversation_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load conversation {conversation_id}: {e}")
        raise DatabaseError("Failed to load conversation") from e

    return ConversationHistoryResponse(
        conversation_id=history["id"],
        title=history["title"],
        created_at=history["createdAt"],
        updated_at=history["updatedAt"],
        messages=history["messages"],
    )


@router.delete(
    "/{conversation_id}",
    summary="Delete Conversation",
    description="Delete a conversation and all of its messages."
)
async def delete_conversation(conversation_id: str):
    try:
        ConversationRepository().delete(conversation_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete conversation {conversation_id}: {e}")
        raise DatabaseError("Failed to delete conversation") from e

    logger.info(f"Deleted conversation via API: {conversation_id}")
    return {"conversationId": conversation_id, "deleted": True}
