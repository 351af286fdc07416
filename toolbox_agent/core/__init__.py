"""
Core primitives that compose the agent pipeline.
"""

from .primitives import (
    ChatMessage,
    ConversationMemory,
    Decision,
    FunctionTool,
    InvocationOutcome,
    MessageRole,
    RunContext,
    Tool,
    ToolCall,
    ToolDescriptor,
    ToolRegistry,
)

__all__ = [
    "ChatMessage",
    "ConversationMemory",
    "Decision",
    "FunctionTool",
    "InvocationOutcome",
    "MessageRole",
    "RunContext",
    "Tool",
    "ToolCall",
    "ToolDescriptor",
    "ToolRegistry",
]
