"""
Database module - persistence layer.

This module handles:
- Database connection management
- ORM models (conversations and campus facts)
- Campus fact lookups
- Conversation persistence
- Table creation and seeding
"""
from src.database.connection import DatabaseConnection, get_database, set_database
from src.database.models import (
    Base,
    Conversation,
    Message,
    Staff,
    Fee,
    Room,
    Knowledge,
)
from src.database.campus_repository import CampusRepository
from src.database.conversation_repository import ConversationRepository
from src.database.init_db import init_tables, drop_tables
from src.database.seed import seed_database

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "set_database",
    # Models
    "Base",
    "Conversation",
    "Message",
    "Staff",
    "Fee",
    "Room",
    "Knowledge",
    # Repositories
    "CampusRepository",
    "ConversationRepository",
    # Init
    "init_tables",
    "drop_tables",
    "seed_database",
]
