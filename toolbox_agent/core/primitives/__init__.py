"""
Foundational data structures shared across the framework.
"""

from .actions import Decision, InvocationOutcome, JSONValue, ToolCall, ToolParameters, serialize_value
from .context import RunContext, background
from .errors import (
    DuplicateNameError,
    IterationExceeded,
    NotFoundError,
    OperationCancelled,
    ReadOnlyViolation,
    ToolboxError,
    ToolExecutionError,
    UpstreamProviderError,
    ValidationError,
)
from .memory import ConversationMemory
from .messages import (
    ChatMessage,
    MessageRole,
    assistant_message,
    coerce_messages,
    system_message,
    user_message,
)
from .tools import FunctionTool, Tool, ToolCallable, ToolDescriptor, ToolRegistry

__all__ = [
    "Decision",
    "InvocationOutcome",
    "JSONValue",
    "ToolCall",
    "ToolParameters",
    "serialize_value",
    "RunContext",
    "background",
    "DuplicateNameError",
    "IterationExceeded",
    "NotFoundError",
    "OperationCancelled",
    "ReadOnlyViolation",
    "ToolboxError",
    "ToolExecutionError",
    "UpstreamProviderError",
    "ValidationError",
    "ConversationMemory",
    "ChatMessage",
    "MessageRole",
    "assistant_message",
    "coerce_messages",
    "system_message",
    "user_message",
    "FunctionTool",
    "Tool",
    "ToolCallable",
    "ToolDescriptor",
    "ToolRegistry",
]
