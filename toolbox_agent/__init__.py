"""
High-level exports for the toolbox agent.

This package exposes the Agent conversation loop, the tool registry and the
provider interface, alongside the error types callers are expected to handle.
"""

from .core.agent import Agent, AgentConfig
from .core.primitives import (
    ChatMessage,
    Decision,
    DuplicateNameError,
    FunctionTool,
    IterationExceeded,
    MessageRole,
    NotFoundError,
    OperationCancelled,
    ReadOnlyViolation,
    RunContext,
    Tool,
    ToolboxError,
    ToolCall,
    ToolDescriptor,
    ToolExecutionError,
    ToolRegistry,
    UpstreamProviderError,
    ValidationError,
)
from .llm import MockProvider, Provider, create_provider
from .tools import QueryTool

__all__ = [
    "Agent",
    "AgentConfig",
    "ChatMessage",
    "Decision",
    "DuplicateNameError",
    "FunctionTool",
    "IterationExceeded",
    "MessageRole",
    "NotFoundError",
    "OperationCancelled",
    "ReadOnlyViolation",
    "RunContext",
    "Tool",
    "ToolboxError",
    "ToolCall",
    "ToolDescriptor",
    "ToolExecutionError",
    "ToolRegistry",
    "UpstreamProviderError",
    "ValidationError",
    "MockProvider",
    "Provider",
    "create_provider",
    "QueryTool",
]
