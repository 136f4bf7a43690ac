"""
Shared fixtures: in-memory SQLite database, seeded campus data,
and a FastAPI test client with no LLM keys configured.
"""
import os

# Must be set before src.core.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GROQ_API_KEY"] = ""
os.environ["GOOGLE_API_KEY"] = ""
os.environ["APP_ENV"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"
os.environ["SEED_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient

from src.core.config import get_settings
from src.core.rate_limiter import reset_rate_limiter
from src.database.connection import DatabaseConnection, set_database
from src.database.models import Base
from src.database.seed import seed_database


@pytest.fixture
def db():
    """A fresh in-memory database installed as the process-wide connection."""
    get_settings.cache_clear()
    connection = DatabaseConnection("sqlite://")
    Base.metadata.create_all(connection.engine)
    set_database(connection)
    yield connection
    set_database(None)


@pytest.fixture
def seeded_db(db):
    seed_database(db=db)
    return db


@pytest.fixture
def client(seeded_db):
    from src.api.main import app
    from src.api.routes.chat import reset_chat_service

    reset_chat_service()
    reset_rate_limiter()
    with TestClient(app) as test_client:
        yield test_client
    reset_chat_service()
    reset_rate_limiter()
