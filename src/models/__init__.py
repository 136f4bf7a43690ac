"""
Models module - Pydantic schemas for request/response validation.
"""
from src.models.chat import (
    ChatRequest,
    ChatResponse,
    Source,
    ConversationSummary,
    ConversationMessage,
    ConversationListResponse,
    ConversationHistoryResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "Source",
    "ConversationSummary",
    "ConversationMessage",
    "ConversationListResponse",
    "ConversationHistoryResponse",
    "HealthResponse",
    "ErrorResponse",
]
