"""
Intent Classifier - Keyword-based message categorization.

The intent decides which campus table is queried for a message:
- FEES_INFO    -> fees
- STAFF_INFO   -> staff
- DIRECTIONS   -> rooms
- EVENTS_INFO / GENERAL_INFO -> knowledge base only
"""
from enum import Enum
from typing import Dict, Tuple

from src.core.logging_config import get_logger

logger = get_logger(__name__)


class Intent(str, Enum):
    """Coarse categories of user messages."""
    FEES_INFO = "FEES_INFO"
    STAFF_INFO = "STAFF_INFO"
    DIRECTIONS = "DIRECTIONS"
    EVENTS_INFO = "EVENTS_INFO"
    GENERAL_INFO = "GENERAL_INFO"


# Checked in order; the first intent with a matching keyword wins
INTENT_KEYWORDS: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = (
    (Intent.FEES_INFO, ("fee", "tuition", "payment")),
    (Intent.STAFF_INFO, ("teacher", "professor", "hod", "faculty", "staff", "head")),
    (Intent.DIRECTIONS, ("where", "location", "room", "building", "directions", "find")),
    (Intent.EVENTS_INFO, ("event", "announcement", "news")),
)

DESCRIPTIONS: Dict[Intent, str] = {
    Intent.FEES_INFO: "Fee structure and payment questions",
    Intent.STAFF_INFO: "Faculty and staff lookups",
    Intent.DIRECTIONS: "Room and building directions",
    Intent.EVENTS_INFO: "Events, announcements and news",
    Intent.GENERAL_INFO: "General campus information",
}


def detect_intent(message: str) -> Intent:
    """
    Classify a message by substring matching.

    Example:
        >>> detect_intent("What is the tuition for MBA?")
        <Intent.FEES_INFO: 'FEES_INFO'>
        >>> detect_intent("Where is CS-204?")
        <Intent.DIRECTIONS: 'DIRECTIONS'>

    Args:
        message: The user's message

    Returns:
        The detected Intent (GENERAL_INFO when nothing matches)
    """
    lower_message = (message or "").lower()

    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in lower_message for keyword in keywords):
            logger.debug(f"Intent detected: {intent.value}")
            return intent

    return Intent.GENERAL_INFO


def describe_intent(intent: Intent) -> str:
    """Human-readable description of an intent."""
    return DESCRIPTIONS.get(intent, "Unknown")
