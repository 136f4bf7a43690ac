"""
LLM Client for Groq and Google Gemini.

Turns a detected intent, the user's question and the retrieved
campus data into a natural-language answer.

Providers are tried in order (Groq, then Gemini), skipping any
without an API key. The client never raises to its caller:
- no key configured   -> canned "not configured" answer
- every provider fails -> apology built from the retrieved data
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import google.generativeai as genai
from groq import Groq

from src.core.config import Settings, get_settings
from src.core.exceptions import LLMError
from src.core.logging_config import get_logger
from src.llm.prompts import build_system_prompt, build_user_prompt

logger = get_logger(__name__)

NOT_CONFIGURED_ANSWER = (
    "LLM is not configured. Please set GROQ_API_KEY on the server to enable responses."
)
EMPTY_ANSWER = "Sorry, I couldn't generate a response."
FALLBACK_PREFIX = "I'm having trouble connecting to the service right now. "

PROVIDER_GROQ = "groq"
PROVIDER_GOOGLE = "google"
PROVIDER_FALLBACK = "fallback"
PROVIDER_UNCONFIGURED = "unconfigured"


@dataclass
class LLMAnswer:
    """Answer text plus the sources shown to the user."""
    answer: str
    sources: List[Dict[str, Any]] = field(default_factory=list)
    provider: str = PROVIDER_UNCONFIGURED


def _sources_from(data: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if data and isinstance(data.get("sources"), list):
        return data["sources"]
    return []


def build_fallback_answer(data: Optional[Dict[str, Any]]) -> str:
    """
    Build an answer without the LLM from the first retrieved fact.

    Priority: fees, then staff, then room.
    """
    if not data:
        return FALLBACK_PREFIX + "Please try again later or contact the administration office."

    fees = data.get("fees") or []
    staff = data.get("staff") or []
    room = data.get("room")

    if fees:
        fee = fees[0]
        return FALLBACK_PREFIX + (
            f"Based on available data, the {fee.get('programName')} program has fee information. "
            f"Please contact the administration for details."
        )

    if staff:
        person = staff[0]
        answer = FALLBACK_PREFIX + (
            f"{person.get('name')} is {person.get('designation')} "
            f"in the {person.get('department')} department."
        )
        if person.get("email"):
            answer += f" Contact: {person['email']}"
        return answer

    if room:
        answer = FALLBACK_PREFIX + (
            f"{room.get('roomCode')} is located in {room.get('buildingName')} on {room.get('floor')}."
        )
        if room.get("textDirections"):
            answer += f" {room['textDirections']}"
        return answer

    return FALLBACK_PREFIX + "Please contact the administration office for assistance."


class LLMClient:
    """
    Hybrid client for Groq and Google Gemini.

    Example:
        >>> client = LLMClient()
        >>> result = client.answer("FEES_INFO", "What is the MBA fee?", {"fees": [...]})
        >>> result.answer
        'The MBA tuition fee for 2024-25 is Rs. 1,20,000.'
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        self.groq_client: Optional[Groq] = None
        if self.settings.groq_api_key:
            self.groq_client = Groq(api_key=self.settings.groq_api_key)

        if self.settings.google_api_key:
            genai.configure(api_key=self.settings.google_api_key)

        if not self.settings.has_llm():
            logger.warning("No LLM API key set (GROQ_API_KEY / GOOGLE_API_KEY). LLM responses will not be available.")
        else:
            logger.info(f"LLM client initialized: providers={[name for name, _ in self._providers()]}")

    def answer(self, intent: str, user_message: str, data: Optional[Dict[str, Any]] = None) -> LLMAnswer:
        """
        Answer a campus question from retrieved data.

        Args:
            intent: Detected intent value
            user_message: The user's question
            data: Retrieved facts (fees, staff, room, knowledge, sources)

        Returns:
            LLMAnswer; never raises for provider failures
        """
        sources = _sources_from(data)

        if not self.settings.has_llm():
            return LLMAnswer(answer=NOT_CONFIGURED_ANSWER, sources=sources, provider=PROVIDER_UNCONFIGURED)

        system_prompt = build_system_prompt(intent)
        user_prompt = build_user_prompt(user_message, data)

        try:
            text, provider = self.generate(user_prompt, system_prompt)
        except LLMError as e:
            logger.error(f"Falling back to data-only answer: {e}")
            return LLMAnswer(answer=build_fallback_answer(data), sources=sources, provider=PROVIDER_FALLBACK)

        return LLMAnswer(answer=text or EMPTY_ANSWER, sources=sources, provider=provider)

    def generate(self, user_message: str, system_prompt: str) -> Tuple[Optional[str], str]:
        """
        Run the prompt through each configured provider until one succeeds.

        Returns:
            Tuple of (completion text, provider name)

        Raises:
            LLMError: If no provider is configured or all of them fail
        """
        providers = self._providers()
        if not providers:
            raise LLMError("No LLM provider configured")

        last_error: Optional[Exception] = None

        for i, (provider, call) in enumerate(providers):
            if i > 0:
                logger.info(f"Falling back to {provider}...")
            try:
                return call(user_message, system_prompt), provider
            except Exception as e:
                error_msg = str(e).lower()
                is_rate_limit = "429" in error_msg or "quota" in error_msg or "rate limit" in error_msg
                log_fn = logger.warning if is_rate_limit else logger.error
                log_fn(f"Provider failed ({provider}): {e}")
                last_error = e

        raise LLMError(f"All LLM providers failed. Last error: {last_error}")

    def _providers(self) -> List[Tuple[str, Callable[[str, str], Optional[str]]]]:
        providers = []
        if self.groq_client is not None:
            providers.append((PROVIDER_GROQ, self._generate_groq))
        if self.settings.google_api_key:
            providers.append((PROVIDER_GOOGLE, self._generate_google))
        return providers

    def _generate_groq(self, user_message: str, system_prompt: str) -> Optional[str]:
        """Execute request using Groq."""
        response = self.groq_client.chat.completions.create(
            model=self.settings.groq_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.llm_max_tokens,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    def _generate_google(self, user_message: str, system_prompt: str) -> Optional[str]:
        """Execute request using Google Gemini."""
        model = genai.GenerativeModel(
            model_name=self.settings.gemini_model,
            system_instruction=system_prompt
        )
        response = model.generate_content(
            user_message,
            generation_config=genai.types.GenerationConfig(
                temperature=self.settings.llm_temperature,
                max_output_tokens=self.settings.llm_max_tokens,
            )
        )
        return response.text
