"""
High-level Agent interface that owns one conversation and drives it through
the provider and the tool registry.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..primitives.context import RunContext, background
from ..primitives.memory import ConversationMemory
from ..primitives.messages import ChatMessage, user_message
from ..primitives.tools import ToolRegistry
from ...llm.base import Provider
from .executor import AgentConfig, AgentExecutor


class Agent:
    """
    One conversation session.

    The provider and the registry are borrowed and may be shared by many
    agents. The history belongs to this agent alone: callers must serialize
    ``process`` and ``reset`` on a given instance (one agent per session).
    A ``reset`` racing an in-flight ``process`` leaves the history in
    whatever state the two interleavings produce.
    """

    def __init__(
        self,
        provider: Provider,
        registry: ToolRegistry,
        *,
        config: Optional[AgentConfig] = None,
    ) -> None:
        self.provider = provider
        self.registry = registry
        self.config = config or AgentConfig()
        self.executor = AgentExecutor(provider, registry, config=self.config)
        self._memory = ConversationMemory()
        self._logger = logging.getLogger(__name__)

    def process(self, user_text: str, context: Optional[RunContext] = None) -> str:
        """
        Handle one user message and return the final answer.

        Raises UpstreamProviderError, IterationExceeded or OperationCancelled;
        tool failures are reported to the provider instead of raised.
        """
        self._logger.info("Processing message: %s", user_text[:80])
        self._memory.append(user_message(user_text))
        return self.executor.run(context or background(), self._memory)

    def history(self) -> List[ChatMessage]:
        return self._memory.snapshot()

    def reset(self) -> None:
        self._memory.clear()
        self._logger.info("Conversation history reset")
