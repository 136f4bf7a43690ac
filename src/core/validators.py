"""
Input Validators - Sanitization and validation utilities.
"""
import re
import uuid
from typing import Any, Optional, Tuple

MAX_MESSAGE_LENGTH = 2000


def sanitize_message(message: str, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """
    Sanitize a user message.

    - Removes null bytes
    - Strips leading/trailing whitespace
    - Normalizes whitespace runs to a single space
    - Limits length

    Args:
        message: Raw user message
        max_length: Maximum allowed length

    Returns:
        Sanitized message
    """
    if not message:
        return ""

    cleaned = message.replace("\x00", "")
    cleaned = cleaned.strip()
    cleaned = re.sub(r'\s+', ' ', cleaned)

    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length]

    return cleaned


def validate_message(message: Any) -> Tuple[bool, str, Optional[str]]:
    """
    Full validation and sanitization of a chat message.

    Args:
        message: Raw value from the request body (may not be a string)

    Returns:
        Tuple of (is_valid, sanitized_message, error_message)
    """
    if not message or not isinstance(message, str):
        return False, "", "Message is required"

    sanitized = sanitize_message(message)

    if not sanitized:
        return False, "", "Message cannot be empty"

    return True, sanitized, None


def validate_conversation_id(conversation_id: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate a conversation ID is a proper UUID.

    Args:
        conversation_id: Conversation ID to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not conversation_id:
        return True, None  # Empty is OK (a new conversation is created)

    try:
        uuid.UUID(conversation_id)
        return True, None
    except ValueError:
        return False, "Invalid conversationId format (must be UUID)"
