"""
API Routes module - Endpoint definitions.

- chat.py          : The campus assistant endpoint
- conversations.py : Stored conversation history
- health.py        : Health check endpoints
"""
from src.api.routes.chat import router as chat_router
from src.api.routes.conversations import router as conversations_router
from src.api.routes.health import router as health_router

__all__ = [
    "chat_router",
    "conversations_router",
    "health_router",
]
