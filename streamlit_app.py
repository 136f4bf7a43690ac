"""
Campus Assistant - Streamlit Frontend

A chat page for the campus assistant API.

Run with: streamlit run streamlit_app.py
"""
import os

import requests
import streamlit as st

# ============================================================
# Configuration
# ============================================================

API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")

SUGGESTIONS = [
    "What is the tuition fee for B.Tech Computer Engineering?",
    "Who is the HOD of Computer Engineering?",
    "Where is CS-204?",
    "What are the library timings?",
]

st.set_page_config(
    page_title="Campus Assistant",
    page_icon="🎓",
    layout="centered",
    initial_sidebar_state="expanded"
)


# ============================================================
# Session State
# ============================================================

def init_session_state():
    """Initialize Streamlit session state variables."""
    if "messages" not in st.session_state:
        st.session_state.messages = []
    if "conversation_id" not in st.session_state:
        st.session_state.conversation_id = None
    if "backend_connected" not in st.session_state:
        st.session_state.backend_connected = False


def start_new_conversation():
    st.session_state.messages = []
    st.session_state.conversation_id = None


# ============================================================
# API Helpers
# ============================================================

def check_backend() -> bool:
    try:
        response = requests.get(f"{API_BASE_URL}/health", timeout=10)
        st.session_state.backend_connected = response.status_code == 200
    except requests.exceptions.RequestException:
        st.session_state.backend_connected = False
    return st.session_state.backend_connected


def send_message(message: str) -> dict:
    """Send a question; returns the API payload or {'error': ...}."""
    payload = {"message": message}
    if st.session_state.conversation_id:
        payload["conversationId"] = st.session_state.conversation_id

    try:
        response = requests.post(f"{API_BASE_URL}/api/chat", json=payload, timeout=60)
        data = response.json()
        if response.status_code != 200:
            return {"error": data.get("message") or data.get("error") or f"HTTP {response.status_code}"}
        return data
    except requests.exceptions.Timeout:
        return {"error": "The assistant took too long to answer. Please try again."}
    except requests.exceptions.ConnectionError:
        return {"error": "Cannot reach the backend."}
    except ValueError:
        return {"error": "The backend returned an invalid response."}


def get_conversations() -> list:
    try:
        response = requests.get(f"{API_BASE_URL}/api/conversations", params={"limit": 10}, timeout=5)
        if response.status_code == 200:
            return response.json().get("conversations", [])
    except requests.exceptions.RequestException:
        pass
    return []


def load_conversation(conversation_id: str):
    """Replace the visible chat with a stored conversation."""
    try:
        response = requests.get(f"{API_BASE_URL}/api/conversations/{conversation_id}", timeout=10)
    except requests.exceptions.RequestException:
        st.error("Could not load conversation")
        return

    if response.status_code != 200:
        st.error("Conversation not found")
        return

    st.session_state.conversation_id = conversation_id
    st.session_state.messages = [
        {"role": msg["sender"], "content": msg["content"], "sources": []}
        for msg in response.json().get("messages", [])
    ]


# ============================================================
# Rendering
# ============================================================

def render_sources(sources: list):
    if not sources:
        return
    with st.expander(f"📚 Sources ({len(sources)})"):
        for source in sources:
            st.markdown(f"**{source['title']}** · _{source['source']}_")
            st.caption(source["snippet"])


def render_sidebar():
    with st.sidebar:
        st.title("🎓 Campus Assistant")

        if st.button("➕ New conversation", use_container_width=True):
            start_new_conversation()
            st.rerun()

        st.subheader("Recent conversations")
        conversations = get_conversations()
        if not conversations:
            st.caption("No conversations yet.")
        for conversation in conversations:
            if st.button(conversation["title"], key=f"conv_{conversation['id']}", use_container_width=True):
                load_conversation(conversation["id"])
                st.rerun()


def render_chat():
    if not st.session_state.messages:
        st.markdown("Ask about fees, faculty, rooms or campus life. For example:")
        for suggestion in SUGGESTIONS:
            st.markdown(f"- {suggestion}")

    for msg in st.session_state.messages:
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])
            render_sources(msg.get("sources"))

    if prompt := st.chat_input("Ask a question about the campus..."):
        st.session_state.messages.append({"role": "user", "content": prompt, "sources": []})
        with st.chat_message("user"):
            st.markdown(prompt)

        with st.chat_message("assistant"):
            with st.spinner("Thinking..."):
                response = send_message(prompt)

            if "error" in response:
                st.error(f"❌ {response['error']}")
                st.session_state.messages.append({
                    "role": "assistant",
                    "content": f"Error: {response['error']}",
                    "sources": []
                })
                return

            st.markdown(response["answer"])
            render_sources(response.get("sources"))

        st.session_state.conversation_id = response["conversationId"]
        st.session_state.messages.append({
            "role": "assistant",
            "content": response["answer"],
            "sources": response.get("sources", [])
        })


# ============================================================
# Main App
# ============================================================

def main():
    init_session_state()

    if not st.session_state.backend_connected:
        check_backend()

    if not st.session_state.backend_connected:
        st.warning("⚠️ Cannot connect to backend. Please start the server:")
        st.code("uvicorn src.api.main:app --reload --port 8000", language="bash")
        return

    render_sidebar()
    render_chat()


if __name__ == "__main__":
    main()
