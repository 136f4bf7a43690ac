import uuid

import pytest
from sqlalchemy.exc import OperationalError

from src.api.routes import chat as chat_routes
from src.core.config import get_settings
from src.core.rate_limiter import RateLimiter
from src.database.campus_repository import CampusRepository
from src.database.conversation_repository import ConversationRepository
from src.database.models import Conversation, Message
from src.llm.client import NOT_CONFIGURED_ANSWER
from src.services.chat_service import ChatService, ChatServiceError, build_sources


def test_chat_creates_conversation(client, seeded_db):
    response = client.post("/api/chat", json={"message": "library timings"})

    assert response.status_code == 200
    body = response.json()
    assert body["answer"] == NOT_CONFIGURED_ANSWER
    assert body["sources"] == [{
        "title": "Library timings",
        "source": "Student Handbook 2024",
        "snippet": (
            "The library is open from 8:00 AM to 8:00 PM on weekdays and 9:00 AM to "
            "1:00 PM on Saturdays. It remains closed on Sundays and public holidays."
        ),
    }]

    with seeded_db.get_session() as session:
        conversation = session.get(Conversation, body["conversationId"])
        assert conversation.title == "library timings"
        senders = [m.sender for m in session.query(Message).filter_by(conversation_id=conversation.id)]
        assert senders == ["user", "assistant"]


def test_chat_continues_conversation(client):
    first = client.post("/api/chat", json={"message": "Where is CS-204?"}).json()
    second = client.post(
        "/api/chat",
        json={"message": "Who is the HOD?", "conversationId": first["conversationId"]}
    ).json()

    assert second["conversationId"] == first["conversationId"]

    history = client.get(f"/api/conversations/{first['conversationId']}").json()
    assert [m["content"] for m in history["messages"] if m["sender"] == "user"] == [
        "Where is CS-204?",
        "Who is the HOD?",
    ]


def test_chat_unknown_conversation_starts_new_one(client):
    unknown = str(uuid.uuid4())
    body = client.post("/api/chat", json={"message": "Hello", "conversationId": unknown}).json()

    assert body["conversationId"] != unknown


def test_chat_sanitizes_message(client):
    body = client.post("/api/chat", json={"message": "  Where   is\n the library? "}).json()
    history = client.get(f"/api/conversations/{body['conversationId']}").json()

    assert history["messages"][0]["content"] == "Where is the library?"


@pytest.mark.parametrize("payload", [
    {},
    {"message": ""},
    {"message": "   "},
    {"message": 42},
    {"message": ["where", "is", "the", "library"]},
])
def test_chat_rejects_invalid_message(client, payload):
    response = client.post("/api/chat", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_chat_rejects_malformed_conversation_id(client):
    response = client.post("/api/chat", json={"message": "Hello", "conversationId": "not-a-uuid"})

    assert response.status_code == 400
    assert response.json()["details"] == "field=conversationId"


def test_chat_rejects_non_json_body(client):
    response = client.post("/api/chat", content=b"not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_chat_service_failure_returns_500(client, monkeypatch):
    def broken(self, message, conversation_id=None):
        raise ChatServiceError("Failed to process message")

    monkeypatch.setattr(ChatService, "process_message", broken)
    response = client.post("/api/chat", json={"message": "Hello"})

    assert response.status_code == 500
    assert response.json()["error"] == "internal_error"
    assert response.json()["message"] == "Internal server error"


def test_chat_rate_limit(client, monkeypatch):
    limiter = RateLimiter(requests_per_minute=1)
    monkeypatch.setattr(chat_routes, "get_rate_limiter", lambda: limiter)

    assert client.post("/api/chat", json={"message": "Hello"}).status_code == 200
    response = client.post("/api/chat", json={"message": "Hello again"})

    assert response.status_code == 429
    assert int(response.headers["Retry-After"]) >= 1


def test_list_and_delete_conversations(client):
    created = client.post("/api/chat", json={"message": "Fee for MBA?"}).json()

    listing = client.get("/api/conversations").json()
    assert listing["total"] == 1
    assert listing["conversations"][0]["title"] == "Fee for MBA?"

    deleted = client.delete(f"/api/conversations/{created['conversationId']}")
    assert deleted.status_code == 200
    assert client.get("/api/conversations").json()["total"] == 0


def test_conversation_history_includes_metadata(client):
    created = client.post("/api/chat", json={"message": "Where is CS-204?"}).json()

    history = client.get(f"/api/conversations/{created['conversationId']}").json()

    assert history["conversationId"] == created["conversationId"]
    assert history["title"] == "Where is CS-204?"
    assert history["createdAt"]
    assert history["updatedAt"] >= history["createdAt"]
    assert [m["sender"] for m in history["messages"]] == ["user", "assistant"]


def test_conversation_database_failure_is_503(client, monkeypatch):
    def broken(self, limit=20):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(ConversationRepository, "list_recent", broken)
    response = client.get("/api/conversations")

    assert response.status_code == 503
    assert response.json()["error"] == "database_error"


def test_missing_conversation_is_404(client):
    missing = str(uuid.uuid4())

    assert client.get(f"/api/conversations/{missing}").status_code == 404
    assert client.delete(f"/api/conversations/{missing}").json()["error"] == "conversation_not_found"


def test_health_endpoints(client):
    assert client.get("/health").json()["status"] == "healthy"

    ready = client.get("/health/ready").json()
    assert ready["status"] == "ready"
    assert ready["database"] == "ok"
    assert ready["llm_configured"] is False


def test_security_headers(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"


# ============================================================
# Service-level retrieval dispatch
# ============================================================

class RecordingLLM:
    """Stands in for LLMClient and records what it was asked."""

    def __init__(self):
        self.calls = []

    def answer(self, intent, user_message, data=None):
        from src.llm.client import LLMAnswer

        self.calls.append((intent, user_message, data))
        return LLMAnswer(answer="ok", sources=data.get("sources", []), provider="test")


@pytest.fixture
def service(seeded_db):
    return ChatService(llm_client=RecordingLLM())


def test_service_fee_question_queries_fees(service):
    service.process_message("MBA")  # no keyword: general
    service.process_message("tuition")
    intent, _, data = service.llm_client.calls[-1]

    assert intent == "FEES_INFO"
    assert [f["category"] for f in data["fees"]] == ["Tuition"] * 4
    assert "staff" not in data and "room" not in data


def test_service_staff_question_queries_staff(service):
    service.process_message("hod electronics")
    intent, _, data = service.llm_client.calls[-1]

    assert intent == "STAFF_INFO"
    assert [s["name"] for s in data["staff"]] == ["Dr. Meera Iyer"]


def test_service_directions_question_queries_rooms(service):
    service.process_message("room cs-101")
    intent, _, data = service.llm_client.calls[-1]

    assert intent == "DIRECTIONS"
    assert data["room"] is None  # whole-query match finds no room


def test_service_knowledge_only_when_found(service):
    service.process_message("Is there a swimming pool?")
    _, _, data = service.llm_client.calls[-1]

    assert "knowledge" not in data
    assert data["sources"] == []


def test_build_sources_truncates_snippet():
    sources = build_sources([{"name": "Long", "source": "Handbook", "text": "a" * 200}])

    assert sources[0]["snippet"] == "a" * 160 + "..."
    assert build_sources([{"name": "Short", "source": "Handbook", "text": "abc"}])[0]["snippet"] == "abc"


def test_service_uses_configured_knowledge_limit(seeded_db, monkeypatch):
    monkeypatch.setenv("KNOWLEDGE_SEARCH_LIMIT", "3")
    get_settings.cache_clear()
    limits = []

    def recording_search(self, query, limit=5):
        limits.append(limit)
        return []

    monkeypatch.setattr(CampusRepository, "search_knowledge", recording_search)
    service = ChatService(llm_client=RecordingLLM())
    service.process_message("library timings")
    get_settings.cache_clear()

    assert limits == [3]
