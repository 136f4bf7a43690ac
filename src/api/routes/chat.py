"""
Chat Routes - The campus assistant endpoint.

POST /api/chat accepts {message, conversationId?} and returns
{answer, sources, conversationId}.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Request, Response

from src.core.exceptions import CampusAssistantException, RateLimitExceeded, ValidationError
from src.core.logging_config import get_logger
from src.core.rate_limiter import get_rate_limiter
from src.core.validators import validate_conversation_id, validate_message
from src.models.chat import ChatRequest, ChatResponse, ErrorResponse
from src.services.chat_service import ChatService, ChatServiceError

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/chat",
    tags=["Chat"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)

_chat_service: Optional[ChatService] = None


def get_chat_service() -> ChatService:
    """Get or create the chat service instance."""
    global _chat_service
    if _chat_service is None:
        _chat_service = ChatService()
    return _chat_service


def reset_chat_service() -> None:
    """Drop the cached service (settings or database changed)."""
    global _chat_service
    _chat_service = None


def _enforce_rate_limit(request: Request, response: Response) -> None:
    client_ip = request.client.host if request.client else "unknown"

    rate_limiter = get_rate_limiter()
    is_allowed, remaining = rate_limiter.is_allowed(client_ip)

    response.headers["X-RateLimit-Limit"] = str(rate_limiter.limit)
    response.headers["X-RateLimit-Remaining"] = str(remaining)

    if not is_allowed:
        reset_time = rate_limiter.get_reset_time(client_ip)
        retry_after = max(1, int((reset_time - datetime.utcnow()).total_seconds()))
        raise RateLimitExceeded(retry_after=retry_after)


@router.post(
    "",
    response_model=ChatResponse,
    summary="Ask the campus assistant",
    description="""
    Send a question about fees, staff, rooms or campus life.

    Include `conversationId` from a previous response to continue
    that conversation; omit it to start a new one.

    **Examples:**
    - "What is the tuition fee for B.Tech?"
    - "Who is the HOD of Computer Engineering?"
    - "Where is CS-204?"
    """
)
async def send_message(body: ChatRequest, request: Request, response: Response) -> ChatResponse:
    """
    Answer a campus question and store the exchange.
    """
    is_valid, message, error = validate_message(body.message)
    if not is_valid:
        raise ValidationError(error, field="message")

    is_valid, error = validate_conversation_id(body.conversation_id)
    if not is_valid:
        raise ValidationError(error, field="conversationId")

    _enforce_rate_limit(request, response)

    try:
        return get_chat_service().process_message(message, body.conversation_id)
    except ChatServiceError as e:
        logger.error(f"Chat API error: {e}")
        raise CampusAssistantException("Internal server error") from e
