"""Conversational sessions with the text model."""

from __future__ import annotations

import threading
from typing import Callable

from ..providers import default_client
from ..providers.base import ChatHandle, ModelClient

CHAT_SYSTEM_INSTRUCTION = (
    "You are CineBot, an AI assistant specialized in filmmaking, photography, and the technical "
    "aspects of cinema cameras like ARRI. You help users understand visual effects and cinematography."
)
EMPTY_REPLY_TEXT = "I couldn't generate a text response."
DEFAULT_CONVERSATION_ID = "default"


class ChatSessionManager:
    """Owns one remote chat handle per conversation id.

    A handle is created on the first message for its conversation and kept
    until ``reset``; a failed send leaves it in place so the conversation
    can continue.
    """

    def __init__(
        self,
        client: ModelClient | None = None,
        *,
        system_instruction: str = CHAT_SYSTEM_INSTRUCTION,
        client_factory: Callable[[], ModelClient] = default_client,
    ) -> None:
        self._client = client
        self._client_factory = client_factory
        self._system_instruction = system_instruction
        self._lock = threading.Lock()
        self._sessions: dict[str, ChatHandle] = {}

    def get_or_create(self, conversation_id: str = DEFAULT_CONVERSATION_ID) -> ChatHandle:
        with self._lock:
            handle = self._sessions.get(conversation_id)
            if handle is None:
                if self._client is None:
                    self._client = self._client_factory()
                handle = self._client.create_chat(system_instruction=self._system_instruction)
                self._sessions[conversation_id] = handle
            return handle

    def send(self, message: str, conversation_id: str = DEFAULT_CONVERSATION_ID) -> str:
        handle = self.get_or_create(conversation_id)
        reply = handle.send_message(message)
        return str(reply or "").strip() or EMPTY_REPLY_TEXT

    def has_session(self, conversation_id: str = DEFAULT_CONVERSATION_ID) -> bool:
        with self._lock:
            return conversation_id in self._sessions

    def reset(self, conversation_id: str = DEFAULT_CONVERSATION_ID) -> bool:
        with self._lock:
            return self._sessions.pop(conversation_id, None) is not None


_default_manager: ChatSessionManager | None = None
_default_lock = threading.Lock()


def default_manager() -> ChatSessionManager:
    global _default_manager
    with _default_lock:
        if _default_manager is None:
            _default_manager = ChatSessionManager()
        return _default_manager


def chat_send(message: str) -> str:
    """Send on the process-wide conversation; raises ``RemoteCallFailed`` on error."""
    return default_manager().send(message)
