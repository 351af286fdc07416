"""
Decisions proposed by a provider and the outcomes of the tool calls they request.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]
ToolParameters = Mapping[str, JSONValue]


@dataclass(frozen=True)
class ToolCall:
    """
    A single tool invocation requested by the provider.

    ``id`` correlates the request with its outcome within one round only.
    """

    id: str
    tool_name: str
    parameters: ToolParameters = field(default_factory=dict)


@dataclass(frozen=True)
class Decision:
    """
    What the provider wants to happen next.

    A decision without tool calls is the final answer.
    """

    content: str
    tool_calls: Tuple[ToolCall, ...] = ()

    @classmethod
    def final(cls, content: str) -> "Decision":
        return cls(content=content)

    @classmethod
    def with_tools(cls, content: str, tool_calls: Sequence[ToolCall]) -> "Decision":
        return cls(content=content, tool_calls=tuple(tool_calls))

    @property
    def is_final(self) -> bool:
        return len(self.tool_calls) == 0


def serialize_value(value: Any) -> str:
    """Render a tool result as compact JSON; non-JSON values fall back to str()."""
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        # non-string dict keys, circular references
        return str(value)


@dataclass
class InvocationOutcome:
    """Success value or failure text for one tool call."""

    call: ToolCall
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        if self.error is not None:
            return f"Error executing {self.call.tool_name}: {self.error}"
        return f"{self.call.tool_name} result: {serialize_value(self.value)}"
