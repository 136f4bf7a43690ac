"""
Source code root package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, errors and cross-cutting utilities
- services/  : Intent detection and chat orchestration
- llm/       : LLM integration and prompt management
- database/  : ORM models, lookups, conversation storage, seeding
- models/    : Pydantic models for request/response schemas
"""
__version__ = "0.1.0"
