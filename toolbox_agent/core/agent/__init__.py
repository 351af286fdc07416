"""
Core agent orchestration components (conversation loop and execution).
"""

from .agent import Agent
from .executor import (
    DEFAULT_MAX_ROUNDS,
    AgentConfig,
    AgentExecutor,
    format_tool_calls,
    format_tool_results,
)

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentExecutor",
    "DEFAULT_MAX_ROUNDS",
    "format_tool_calls",
    "format_tool_results",
]
