"""
Custom Exceptions - Application-specific error classes.

Each exception carries an HTTP status code and an error code.
The API layer turns them into JSON error responses; no stack
traces are leaked to clients.
"""
from typing import Optional


class CampusAssistantException(Exception):
    """
    Base exception for all campus assistant errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(CampusAssistantException):
    """Raised when input validation fails."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class ConversationNotFoundError(CampusAssistantException):
    """Raised when a conversation id does not exist."""
    status_code = 404
    error_code = "conversation_not_found"

    def __init__(self, conversation_id: str):
        super().__init__(
            message=f"Conversation not found: {conversation_id}",
            details=f"conversation_id={conversation_id}"
        )
        self.conversation_id = conversation_id


class RateLimitExceeded(CampusAssistantException):
    """Raised when a client exceeds the rate limit."""
    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(self, retry_after: int = 60):
        super().__init__(
            message=f"Rate limit exceeded. Please wait {retry_after} seconds.",
            details=f"retry_after={retry_after}"
        )
        self.retry_after = retry_after


class DatabaseError(CampusAssistantException):
    """Raised when database operations fail."""
    status_code = 503
    error_code = "database_error"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)


class LLMError(CampusAssistantException):
    """Raised when every configured LLM provider fails."""
    status_code = 503
    error_code = "llm_error"

    def __init__(self, message: str = "LLM service unavailable"):
        super().__init__(message)
