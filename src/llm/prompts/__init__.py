"""
Prompts module - LLM prompt templates.

Prompts live in their own files so changes to wording are
reviewed separately from code changes.
"""
from src.llm.prompts.campus_prompts import (
    NO_DATA_TEXT,
    format_data_block,
    build_system_prompt,
    build_user_prompt,
)

__all__ = [
    "NO_DATA_TEXT",
    "format_data_block",
    "build_system_prompt",
    "build_user_prompt",
]
