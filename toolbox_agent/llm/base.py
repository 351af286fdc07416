"""
Base interfaces for completion providers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..core.primitives.actions import Decision
from ..core.primitives.context import RunContext
from ..core.primitives.messages import ChatMessage, coerce_messages
from ..core.primitives.tools import ToolDescriptor


class Provider(ABC):
    """
    Decides the next step of a conversation.

    Given the full history and the descriptors of the available tools, a
    provider returns either a final answer or a batch of tool calls.
    Implementations must be safe to share between agents.
    """

    @abstractmethod
    def complete(
        self,
        context: RunContext,
        history: Sequence[ChatMessage],
        tools: Sequence[ToolDescriptor],
    ) -> Decision:
        raise NotImplementedError


class LLMProvider(Provider):
    """
    Common configuration for providers backed by a chat-completion model.
    """

    def __init__(
        self,
        model: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: Optional[int] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    def _resolve_kwargs(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"model": self.model, "temperature": self.temperature}
        if self.max_output_tokens is not None:
            payload["max_tokens"] = self.max_output_tokens
        return payload

    def build_payload(self, messages: List[ChatMessage], **kwargs: Any) -> Dict[str, Any]:
        """
        Utility for subclasses that send HTTP requests with JSON bodies.
        """
        payload = self._resolve_kwargs()
        payload.update(kwargs)
        payload["messages"] = coerce_messages(messages)
        return payload
