"""
In-memory conversation history owned by a single agent.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .messages import ChatMessage


class ConversationMemory:
    """
    Append-only record of the conversation between the user, the agent and
    the provider, including folded tool results.

    Not thread-safe: an instance belongs to exactly one agent and callers
    serialize access to that agent.
    """

    def __init__(self, messages: Optional[Iterable[ChatMessage]] = None) -> None:
        self._messages: List[ChatMessage] = list(messages or [])

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def extend(self, new_messages: Iterable[ChatMessage]) -> None:
        self._messages.extend(list(new_messages))

    def last(self) -> Optional[ChatMessage]:
        if not self._messages:
            return None
        return self._messages[-1]

    def snapshot(self) -> List[ChatMessage]:
        """Return a shallow copy so callers cannot mutate internal state."""
        return list(self._messages)

    def clear(self) -> None:
        self._messages = []

    def __len__(self) -> int:
        return len(self._messages)
