"""
Utilities for registering and invoking tools in the agent loop.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from .actions import ToolParameters
from .context import RunContext, background
from .errors import DuplicateNameError, NotFoundError, ToolboxError, ToolExecutionError, ValidationError

logger = logging.getLogger(__name__)

EMPTY_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}


class Tool(ABC):
    """
    Contract every capability exposed to the agent implements.

    ``execute`` may be called concurrently by several agents sharing one
    registry; implementations that hold a resource (a database handle, a
    socket) guard it themselves. Tools owning such a resource release it in
    ``close``, which is called by whoever constructed the tool.
    """

    name: str
    description: str

    @abstractmethod
    def schema(self) -> Dict[str, Any]:
        """Return the JSON schema describing accepted parameters."""

    @abstractmethod
    def execute(self, context: RunContext, parameters: ToolParameters) -> Any:
        """Run the tool and return a JSON-serializable result."""

    def close(self) -> None:
        return None


ToolCallable = Callable[[Dict[str, Any]], Any]


@dataclass(eq=False)
class FunctionTool(Tool):
    """Adapter exposing a plain callable as a tool."""

    name: str  # 工具名称（供模型引用）
    description: str  # 工具用途描述
    func: ToolCallable  # 实际执行逻辑
    parameters: Optional[Dict[str, Any]] = None  # 参数 JSON Schema

    def schema(self) -> Dict[str, Any]:
        return dict(self.parameters) if self.parameters else dict(EMPTY_SCHEMA)

    def execute(self, context: RunContext, parameters: ToolParameters) -> Any:
        missing = [key for key in self.schema().get("required", []) if key not in parameters]
        if missing:
            raise ValidationError(f"missing required parameter(s): {', '.join(missing)}")
        try:
            return self.func(dict(parameters))
        except ToolboxError:
            raise
        except Exception as exc:
            raise ToolExecutionError(f"Tool '{self.name}' failed: {exc}") from exc


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and parameter schema of a registered tool."""

    name: str
    description: str
    parameters: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "parameters": self.parameters}


class ToolRegistry:
    """
    Thread-safe catalog of tools keyed by name.

    A single lock guards the name -> tool mapping. Tool execution happens
    outside the lock so a slow tool never blocks registration or lookups.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, Tool] = {}
        self._lock = threading.Lock()

    def register(self, tool: Tool) -> None:
        name = _tool_name(tool)
        with self._lock:
            if name in self._tools:
                raise DuplicateNameError(f"tool {name!r} already registered")
            self._tools[name] = tool
        logger.debug("Registered tool: %s", name)

    def update(self, tools: Iterable[Tool]) -> None:
        """Register several tools at once; nothing is registered if any name collides."""
        batch = [(_tool_name(tool), tool) for tool in tools]
        with self._lock:
            seen = set(self._tools)
            for name, _ in batch:
                if name in seen:
                    raise DuplicateNameError(f"tool {name!r} already registered")
                seen.add(name)
            self._tools.update(batch)

    def get(self, name: str) -> Tool:
        with self._lock:
            try:
                return self._tools[name]
            except KeyError:
                raise NotFoundError(f"tool {name!r} not found") from None

    def list_tools(self) -> List[Tool]:
        """Snapshot of registered tools; callers must not rely on the order."""
        with self._lock:
            return list(self._tools.values())

    def names(self) -> List[str]:
        with self._lock:
            return list(self._tools.keys())

    def describe(self) -> List[ToolDescriptor]:
        """Descriptors for every tool, ordered by name and rebuilt on each call."""
        with self._lock:
            entries = sorted(self._tools.items())
        return [
            ToolDescriptor(name=name, description=tool.description, parameters=tool.schema())
            for name, tool in entries
        ]

    def execute(
        self,
        name: str,
        parameters: ToolParameters,
        context: Optional[RunContext] = None,
    ) -> Any:
        tool = self.get(name)
        return tool.execute(context or background(), parameters)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)


def _tool_name(tool: Tool) -> str:
    name = getattr(tool, "name", None)
    if not isinstance(name, str) or not name:
        raise ValueError(f"tool {tool!r} must report a non-empty string name")
    return name
