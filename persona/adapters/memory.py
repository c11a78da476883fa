"""Conversation history keyed by (thread_id, resource_id).

Storage is LangChain's in-memory chat history; this module only keys it
and keeps each history inside the requested message bound.
"""

import threading

from langchain_core.chat_history import InMemoryChatMessageHistory
from langchain_core.messages import BaseMessage


class ConversationMemory:
    """Holds one chat history per thread/resource pair."""

    def __init__(self) -> None:
        self._histories: dict[tuple[str, str], InMemoryChatMessageHistory] = {}
        self._lock = threading.Lock()

    def history(self, thread_id: str, resource_id: str) -> InMemoryChatMessageHistory:
        """Get or create the history for a session."""
        key = (thread_id, resource_id)
        with self._lock:
            if key not in self._histories:
                self._histories[key] = InMemoryChatMessageHistory()
            return self._histories[key]

    def recent(self, thread_id: str, resource_id: str, limit: int) -> list[BaseMessage]:
        """The last `limit` messages of a session, oldest first."""
        if limit <= 0:
            return []
        return list(self.history(thread_id, resource_id).messages[-limit:])

    def append(
        self,
        thread_id: str,
        resource_id: str,
        messages: list[BaseMessage],
        limit: int,
    ) -> None:
        """Add messages and drop anything older than the last `limit`."""
        history = self.history(thread_id, resource_id)
        history.add_messages(messages)
        if len(history.messages) > limit:
            history.messages = history.messages[-limit:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._histories)
