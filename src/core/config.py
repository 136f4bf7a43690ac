"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

LLM keys are optional: without them the assistant still answers,
using a canned "not configured" message.
"""
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

DEFAULT_DATABASE_URL = "sqlite:///./campus_assistant.db"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        database_url: SQLAlchemy connection string
        groq_api_key: API key for Groq (None disables the provider)
        groq_model: Groq model identifier
        google_api_key: API key for Google Gemini (None disables the provider)
        gemini_model: Gemini model identifier
        llm_temperature: LLM creativity (0.0 = deterministic, 1.0 = creative)
        llm_max_tokens: Maximum response length
        knowledge_search_limit: Max knowledge snippets attached per question
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str

    # Database settings
    database_url: str
    seed_on_startup: bool

    # LLM settings
    groq_api_key: Optional[str]
    groq_model: str
    google_api_key: Optional[str]
    gemini_model: str
    llm_temperature: float
    llm_max_tokens: int

    # Retrieval
    knowledge_search_limit: int

    # Safety settings
    rate_limit_per_minute: int
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"

    def has_llm(self) -> bool:
        """True when at least one LLM provider key is configured."""
        return bool(self.groq_api_key or self.google_api_key)


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _get_optional(key: str) -> Optional[str]:
    """Get an environment variable, treating blank values as unset."""
    value = os.environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_bool(key: str, default: str) -> bool:
    return _get_env(key, default).lower() == "true"


def normalize_database_url(database_url: str) -> str:
    """
    Rewrite hosted-provider URLs into SQLAlchemy dialect URLs.

    - postgres://  -> postgresql://
    - mysql://     -> mysql+pymysql://
    - strips the ssl-mode query parameter, which pymysql rejects
    """
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    if database_url.startswith("mysql://"):
        database_url = database_url.replace("mysql://", "mysql+pymysql://", 1)

    if "ssl-mode=" in database_url:
        database_url = re.sub(r"[?&]ssl-mode=[^&]+", "", database_url)
        if "?" not in database_url and "&" in database_url:
            database_url = database_url.replace("&", "?", 1)

    return database_url


def _resolve_database_url() -> str:
    # Priority:
    # 1. DATABASE_URL (hosted Postgres/MySQL)
    # 2. Local components (DB_HOST, DB_USER, ...)
    # 3. Local SQLite file
    database_url = _get_optional("DATABASE_URL")

    if not database_url and _get_optional("DB_HOST"):
        host = _get_env("DB_HOST")
        port = _get_env("DB_PORT", "3306")
        user = _get_env("DB_USER", "root")
        password = _get_env("DB_PASSWORD", "")
        name = _get_env("DB_NAME", "campus_db")
        database_url = f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}"

    return normalize_database_url(database_url or DEFAULT_DATABASE_URL)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once; call get_settings.cache_clear() to
    re-read the environment (tests do this).

    Returns:
        Settings instance with all configuration values
    """
    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "CampusAssistant"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),

        # Database
        database_url=_resolve_database_url(),
        seed_on_startup=_get_bool("SEED_ON_STARTUP", "false"),

        # LLM
        groq_api_key=_get_optional("GROQ_API_KEY"),
        groq_model=_get_env("GROQ_MODEL", "llama-3.1-8b-instant"),
        google_api_key=_get_optional("GOOGLE_API_KEY"),
        gemini_model=_get_env("GEMINI_MODEL", "gemini-1.5-flash"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.7")),
        llm_max_tokens=int(_get_env("LLM_MAX_TOKENS", "500")),

        # Retrieval
        knowledge_search_limit=int(_get_env("KNOWLEDGE_SEARCH_LIMIT", "5")),

        # Safety
        rate_limit_per_minute=int(_get_env("RATE_LIMIT_PER_MINUTE", "30")),
        enable_audit_logging=_get_bool("ENABLE_AUDIT_LOGGING", "true"),
    )
