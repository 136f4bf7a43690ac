"""
Chat Service - Business logic for campus questions.

This service orchestrates one chat turn:
1. Detect the intent of the message
2. Look up structured facts for that intent
3. Search the knowledge base for supporting snippets
4. Ask the LLM for an answer grounded on those facts
5. Persist the question and answer to the conversation
"""
from typing import Any, Dict, List, Optional

from src.core.config import get_settings
from src.core.logging_config import get_logger
from src.database.campus_repository import CampusRepository
from src.database.conversation_repository import ConversationRepository
from src.llm.client import LLMClient
from src.models.chat import ChatResponse, Source
from src.services.intent import Intent, describe_intent, detect_intent

logger = get_logger(__name__)

SNIPPET_LENGTH = 160


def build_sources(knowledge: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Turn knowledge rows into UI sources with a 160-character snippet.
    """
    sources = []
    for item in knowledge:
        text = item.get("text") or ""
        snippet = text[:SNIPPET_LENGTH] + ("..." if len(text) > SNIPPET_LENGTH else "")
        sources.append({
            "title": item.get("name"),
            "source": item.get("source"),
            "snippet": snippet,
        })
    return sources


class ChatService:
    """
    Service for answering campus questions with conversation history.

    Example:
        >>> service = ChatService()
        >>> response = service.process_message("What is the B.Tech tuition fee?")
        >>> response.conversation_id
        '0b7c...'
    """

    def __init__(
        self,
        campus_repository: Optional[CampusRepository] = None,
        conversation_repository: Optional[ConversationRepository] = None,
        llm_client: Optional[LLMClient] = None
    ):
        self.settings = get_settings()
        self.campus = campus_repository or CampusRepository()
        self.conversations = conversation_repository or ConversationRepository()
        self.llm_client = llm_client or LLMClient()
        logger.info("ChatService initialized")

    def process_message(self, message: str, conversation_id: Optional[str] = None) -> ChatResponse:
        """
        Answer a message and record the turn.

        Args:
            message: Sanitized user message
            conversation_id: Conversation to continue, or None

        Returns:
            ChatResponse with answer, sources and conversation id

        Raises:
            ChatServiceError: If retrieval or persistence fails
        """
        intent = detect_intent(message)

        logger.info(
            f"Processing message: intent={intent.value} ({describe_intent(intent)}), "
            f"conversation={conversation_id or 'new'}, "
            f"message_length={len(message)}"
        )

        try:
            data = self._retrieve(intent, message)

            llm_answer = self.llm_client.answer(
                intent=intent.value,
                user_message=message,
                data=data
            )

            conversation = self.conversations.record_turn(
                conversation_id,
                message,
                llm_answer.answer
            )
        except Exception as e:
            logger.exception(f"Unexpected error in chat service: {e}")
            raise ChatServiceError("Failed to process message") from e

        logger.info(
            f"Message processed: conversation={conversation['id']}, "
            f"provider={llm_answer.provider}, sources={len(llm_answer.sources)}"
        )

        return ChatResponse(
            answer=llm_answer.answer,
            sources=[Source(**source) for source in llm_answer.sources],
            conversation_id=conversation["id"],
        )

    def _retrieve(self, intent: Intent, message: str) -> Dict[str, Any]:
        """
        Collect the data block for the LLM.

        Intent picks one fact table; the knowledge base is always
        searched and included only when it has hits.
        """
        data: Dict[str, Any] = {}

        if intent == Intent.FEES_INFO:
            data["fees"] = self.campus.get_fee_info(message)
        elif intent == Intent.STAFF_INFO:
            data["staff"] = self.campus.get_staff_info(message)
        elif intent == Intent.DIRECTIONS:
            data["room"] = self.campus.get_room_directions(message)

        knowledge = self.campus.search_knowledge(message, self.settings.knowledge_search_limit)
        if knowledge:
            data["knowledge"] = knowledge

        data["sources"] = build_sources(knowledge)
        return data


class ChatServiceError(Exception):
    """
    Raised when a chat turn cannot be completed
    (database failure or unexpected error).
    """
    pass
