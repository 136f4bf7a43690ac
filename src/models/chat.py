"""
Request and Response models for the Chat API.

Field names on the wire are camelCase (conversationId); Python
attributes are snake_case. Both spellings are accepted on input.
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """
    Request model for POST /api/chat.

    message is typed loosely on purpose: a missing or non-string
    message must produce the API's own 400 error, not a schema 422.
    """
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[Any] = Field(
        default=None,
        description="The user's question",
        examples=["Who is the HOD of Computer Engineering?"]
    )
    conversation_id: Optional[str] = Field(
        default=None,
        alias="conversationId",
        description="Conversation to continue; omit to start a new one"
    )


class Source(BaseModel):
    """A knowledge snippet the answer was grounded on."""
    title: str
    source: str
    snippet: str


class ChatResponse(BaseModel):
    """Response model for POST /api/chat."""
    model_config = ConfigDict(populate_by_name=True)

    answer: str = Field(..., description="The assistant's answer")
    sources: List[Source] = Field(default_factory=list)
    conversation_id: str = Field(..., alias="conversationId")


class ConversationSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class ConversationMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    conversation_id: str = Field(..., alias="conversationId")
    sender: str
    content: str
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class ConversationListResponse(BaseModel):
    conversations: List[ConversationSummary]
    total: int


class ConversationHistoryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(..., alias="conversationId")
    title: str
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    messages: List[ConversationMessage]


class HealthResponse(BaseModel):
    """Response model for the /health endpoints."""
    status: str = Field(default="healthy")
    version: str
    database: Optional[str] = None
    llm_configured: Optional[bool] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
