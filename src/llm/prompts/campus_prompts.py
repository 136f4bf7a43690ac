"""
Campus Assistant Prompts - Retrieval-grounded answer generation.

The system prompt pins the model to the DATA block; the user prompt
carries the question plus the retrieved rows as pretty-printed JSON.
"""
import json
from typing import Any, Dict, Optional

NO_DATA_TEXT = "No structured data provided."


def build_system_prompt(intent: str) -> str:
    """
    Get the system prompt for answering a campus question.

    Args:
        intent: Detected intent value (e.g. 'FEES_INFO')

    Returns:
        Complete system prompt for the LLM
    """
    return f"""You are the official campus assistant chatbot for the college.
You must always answer using the structured data provided in the "DATA" section below when it is available.
If the data does not contain the requested information, say you are not sure and suggest contacting the college office.

Rules:
- If DATA includes staff, fees, rooms or knowledge, treat it as the single source of truth.
- Never invent staff names, fees, or room codes.
- Keep answers clear and concise.
- Provide text-based directions only; do not generate maps.
- Be friendly and helpful.

Current intent: {intent}"""


def format_data_block(data: Optional[Dict[str, Any]]) -> str:
    """Render retrieved data as two-space indented JSON."""
    if not data:
        return NO_DATA_TEXT
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def build_user_prompt(user_message: str, data: Optional[Dict[str, Any]]) -> str:
    """
    Get the user prompt: the question followed by the DATA block.

    Args:
        user_message: The user's question
        data: Retrieved facts keyed by source (fees, staff, room, knowledge, sources)

    Returns:
        Complete user prompt for the LLM
    """
    return f"""User question:
"{user_message}"

DATA (from database / knowledge base):
{format_data_block(data)}"""
