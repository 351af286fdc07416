"""
Composition root: builds the registry, the tools and the provider from
Settings and hands out one Agent per session.

Usage::

    settings = Settings.from_env()
    with ToolboxRuntime.from_settings(settings) as runtime:
        agent = runtime.new_agent()
        print(agent.process("list my tasks"))
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .config import Settings
from .core.agent import Agent, AgentConfig
from .core.primitives.tools import Tool, ToolRegistry
from .llm import Provider, create_provider
from .tools import QueryTool

logger = logging.getLogger(__name__)


class ToolboxRuntime:
    """
    Owns the shared registry and provider, and the tools it constructed.

    Agents created by ``new_agent`` borrow the registry and provider; closing
    the runtime closes the owned tools, after which those agents must not be
    used.
    """

    def __init__(
        self,
        provider: Provider,
        registry: ToolRegistry,
        *,
        agent_config: Optional[AgentConfig] = None,
        owned_tools: Optional[List[Tool]] = None,
    ) -> None:
        self.provider = provider
        self.registry = registry
        self.agent_config = agent_config or AgentConfig()
        self._owned_tools = list(owned_tools or [])
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "ToolboxRuntime":
        registry = ToolRegistry()
        query_tool = QueryTool.connect(settings.database, read_only=settings.database_read_only)
        try:
            registry.register(query_tool)
            logger.info("Registered tool: %s", query_tool.name)
            provider = create_provider(
                settings.provider,
                settings.model,
                timeout=settings.request_timeout,
            )
        except Exception:
            query_tool.close()
            raise
        logger.info("Using provider: %s", settings.provider)
        return cls(
            provider,
            registry,
            agent_config=AgentConfig(
                max_rounds=settings.max_rounds,
                parallel_tool_calls=settings.parallel_tool_calls,
            ),
            owned_tools=[query_tool],
        )

    def new_agent(self) -> Agent:
        if self._closed:
            raise RuntimeError("runtime is closed")
        return Agent(self.provider, self.registry, config=self.agent_config)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for tool in self._owned_tools:
            tool.close()
        logger.info("Closed %d owned tool(s)", len(self._owned_tools))

    def __enter__(self) -> "ToolboxRuntime":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
