"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- No raw queries (those belong in database/)
- Orchestrate between intent detection, retrieval, LLM and persistence
"""
from src.services.intent import Intent, detect_intent, describe_intent
from src.services.chat_service import ChatService, ChatServiceError, build_sources

__all__ = [
    "Intent",
    "detect_intent",
    "describe_intent",
    "ChatService",
    "ChatServiceError",
    "build_sources",
]
