"""
Database Models - SQLAlchemy ORM models.

Two groups of tables:
- Conversation history: Conversation, Message
- Campus facts: Staff, Fee, Room, Knowledge

to_dict() output uses the camelCase keys of the public JSON API,
so rows can be dropped into the LLM data block unchanged.
"""
import uuid
from datetime import datetime
from typing import Dict, Any

from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()

STAFF_ACTIVE = "ACTIVE"
STAFF_INACTIVE = "INACTIVE"


def _new_id() -> str:
    return str(uuid.uuid4())


def _iso(value: datetime) -> str | None:
    return value.isoformat() if value else None


class Conversation(Base):
    """A chat thread; titled after its first user message."""
    __tablename__ = "conversations"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="Message.id"
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class Message(Base):
    """One message in a conversation, sent by 'user' or 'assistant'."""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(
        String(36),
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    sender = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    conversation = relationship("Conversation", back_populates="messages")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "conversationId": self.conversation_id,
            "sender": self.sender,
            "content": self.content,
            "createdAt": _iso(self.created_at),
        }


class Staff(Base):
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    department = Column(String(255), nullable=False)
    designation = Column(String(255), nullable=False)
    status = Column(String(20), default=STAFF_ACTIVE, nullable=False)
    email = Column(String(255), nullable=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "department": self.department,
            "designation": self.designation,
            "status": self.status,
            "email": self.email,
        }


class Fee(Base):
    __tablename__ = "fees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    program_name = Column(String(255), nullable=False)
    academic_year = Column(String(50), nullable=False)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "programName": self.program_name,
            "academicYear": self.academic_year,
            "category": self.category,
            # Numeric comes back as Decimal, which json.dumps rejects
            "amount": float(self.amount) if self.amount is not None else None,
        }


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_code = Column(String(50), nullable=False)
    building_name = Column(String(255), nullable=False)
    floor = Column(String(50), nullable=False)
    text_directions = Column(Text, nullable=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "roomCode": self.room_code,
            "buildingName": self.building_name,
            "floor": self.floor,
            "textDirections": self.text_directions,
        }


class Knowledge(Base):
    """A free-text snippet (handbook page, notice, FAQ) with its source."""
    __tablename__ = "knowledge"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    source = Column(String(255), nullable=False)
    text = Column(Text, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "source": self.source,
            "text": self.text,
        }
