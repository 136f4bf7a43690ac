"""
Conversation Repository - Persistent chat history.

Each chat turn is stored as a user message and an assistant message
on a Conversation row. Conversations are titled after the first
user message.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from src.core.exceptions import ConversationNotFoundError
from src.core.logging_config import get_logger
from src.database.connection import DatabaseConnection, get_database
from src.database.models import Conversation, Message

logger = get_logger(__name__)

TITLE_MAX_LENGTH = 50
SENDER_USER = "user"
SENDER_ASSISTANT = "assistant"


def make_title(message: str) -> str:
    """First 50 characters of the message, with '...' if it was cut."""
    if len(message) > TITLE_MAX_LENGTH:
        return message[:TITLE_MAX_LENGTH] + "..."
    return message


class ConversationRepository:
    """
    Create, extend, list and delete conversations.

    Example:
        >>> repo = ConversationRepository()
        >>> conv = repo.record_turn(None, "Where is room B204?", "Block B, 2nd floor.")
        >>> repo.get_messages(conv["id"])
        [{'sender': 'user', ...}, {'sender': 'assistant', ...}]
    """

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    def get_or_create(self, conversation_id: Optional[str], first_message: str) -> Dict[str, Any]:
        """
        Return an existing conversation or create a new one.

        Unknown ids are not an error: a fresh conversation is started.
        """
        with self.db.get_session() as session:
            conversation = self._get_or_create(session, conversation_id, first_message)
            return conversation.to_dict()

    def add_message(self, conversation_id: str, sender: str, content: str) -> Dict[str, Any]:
        with self.db.get_session() as session:
            self._require(session, conversation_id)
            message = self._add_message(session, conversation_id, sender, content)
            session.flush()
            return message.to_dict()

    def touch(self, conversation_id: str) -> None:
        """Bump the conversation's updated_at timestamp."""
        with self.db.get_session() as session:
            self._touch(self._require(session, conversation_id))

    def record_turn(
        self,
        conversation_id: Optional[str],
        user_message: str,
        answer: str
    ) -> Dict[str, Any]:
        """
        Persist one question/answer pair in a single transaction.

        Args:
            conversation_id: Existing conversation, or None to start one
            user_message: The user's message
            answer: The assistant's reply

        Returns:
            The conversation dict the turn was saved to
        """
        with self.db.get_session() as session:
            conversation = self._get_or_create(session, conversation_id, user_message)
            self._add_message(session, conversation.id, SENDER_USER, user_message)
            self._add_message(session, conversation.id, SENDER_ASSISTANT, answer)
            self._touch(conversation)
            session.flush()

            logger.info(f"Saved chat turn to conversation {conversation.id}")
            return conversation.to_dict()

    def list_recent(self, limit: int = 20) -> List[Dict[str, Any]]:
        """Most recently active conversations first."""
        with self.db.get_session() as session:
            rows = (
                session.query(Conversation)
                .order_by(Conversation.updated_at.desc())
                .limit(limit)
                .all()
            )
            return [row.to_dict() for row in rows]

    def get_messages(self, conversation_id: str) -> List[Dict[str, Any]]:
        """
        Raises:
            ConversationNotFoundError: If the conversation does not exist
        """
        with self.db.get_session() as session:
            conversation = self._require(session, conversation_id)
            return [message.to_dict() for message in conversation.messages]

    def get_history(self, conversation_id: str) -> Dict[str, Any]:
        """
        Conversation dict with its ordered messages under "messages".

        Raises:
            ConversationNotFoundError: If the conversation does not exist
        """
        with self.db.get_session() as session:
            conversation = self._require(session, conversation_id)
            history = conversation.to_dict()
            history["messages"] = [message.to_dict() for message in conversation.messages]
            return history

    def delete(self, conversation_id: str) -> None:
        """
        Delete a conversation and its messages.

        Raises:
            ConversationNotFoundError: If the conversation does not exist
        """
        with self.db.get_session() as session:
            session.delete(self._require(session, conversation_id))
        logger.info(f"Deleted conversation {conversation_id}")

    def _get_or_create(
        self,
        session: Session,
        conversation_id: Optional[str],
        first_message: str
    ) -> Conversation:
        conversation = None
        if conversation_id:
            conversation = session.get(Conversation, conversation_id)

        if conversation is None:
            conversation = Conversation(title=make_title(first_message))
            session.add(conversation)
            session.flush()
            logger.info(f"Created conversation {conversation.id}")

        return conversation

    def _require(self, session: Session, conversation_id: str) -> Conversation:
        conversation = session.get(Conversation, conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    def _add_message(self, session: Session, conversation_id: str, sender: str, content: str) -> Message:
        message = Message(conversation_id=conversation_id, sender=sender, content=content)
        session.add(message)
        return message

    def _touch(self, conversation: Conversation) -> None:
        conversation.updated_at = datetime.utcnow()
