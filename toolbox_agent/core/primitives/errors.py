"""
Exception hierarchy shared by the registry, the tools and the agent loop.

Per-invocation errors (NotFoundError, ValidationError, ToolExecutionError) are
folded back into the conversation as text. UpstreamProviderError,
IterationExceeded and OperationCancelled abort the current ``process`` call.
"""

from __future__ import annotations


class ToolboxError(Exception):
    """Base class for every error raised by the framework."""


class DuplicateNameError(ToolboxError):
    """Raised when a tool name is already registered."""


class NotFoundError(ToolboxError, LookupError):
    """Raised when no tool is registered under the requested name."""


class ValidationError(ToolboxError, ValueError):
    """Raised when a tool rejects missing or malformed parameters."""


class ReadOnlyViolation(ValidationError):
    """Raised when a query tool is asked to run a non read-only statement."""


class ToolExecutionError(ToolboxError, RuntimeError):
    """Raised when a tool invocation fails."""


class UpstreamProviderError(ToolboxError, RuntimeError):
    """Raised when the completion provider call fails."""


class IterationExceeded(ToolboxError, RuntimeError):
    """Raised when the round bound is reached without a final answer."""

    def __init__(self, max_rounds: int) -> None:
        super().__init__(f"max iterations reached without completion ({max_rounds} rounds)")
        self.max_rounds = max_rounds


class OperationCancelled(ToolboxError):
    """Raised when the caller cancelled the run or its deadline passed."""
