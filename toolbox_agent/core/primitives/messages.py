"""
Core message primitives shared across the agent pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List


class MessageRole(str, Enum):
    """Chat roles that may appear in a conversation history."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """
    One turn of a conversation.

    Messages are immutable once created so that a history snapshot handed to
    a provider can never be altered behind the agent's back.
    """

    role: MessageRole
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {"role": self.role.value, "content": self.content}


def system_message(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.SYSTEM, content=content)


def user_message(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.USER, content=content)


def assistant_message(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.ASSISTANT, content=content)


def coerce_messages(messages: Iterable[ChatMessage]) -> List[Dict[str, Any]]:
    """Convert a sequence of message objects into dictionaries."""
    return [message.to_dict() for message in messages]
