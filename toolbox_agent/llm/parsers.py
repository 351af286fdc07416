"""
Parser turning OpenAI-style chat completion bodies into decisions.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple
from uuid import uuid4

from ..core.primitives.actions import Decision, ToolCall
from ..core.primitives.errors import UpstreamProviderError


LOGGER = logging.getLogger(__name__)


class ChatCompletionParser:
    """
    Reads the first choice of a chat completion.

    Native ``tool_calls`` are preferred. Models without function calling may
    instead answer with a JSON object of the form
    ``{"type": "tool", "tool": name, "input": {...}, "thought": "..."}``;
    that shape is accepted as a single tool call with the thought as content.
    Any other content is the final answer.
    """

    def parse(self, body: Mapping[str, Any]) -> Decision:
        try:
            message = body["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as exc:
            raise UpstreamProviderError(f"Malformed response structure: {body}") from exc
        content = message.get("content") or ""
        raw_calls = message.get("tool_calls") or []
        if raw_calls:
            calls = [self._parse_native_call(raw) for raw in raw_calls]
            LOGGER.info("Parser resolved %d native tool call(s)", len(calls))
            return Decision.with_tools(content, calls)
        fallback = self._parse_json_content(content)
        if fallback is not None:
            thought, call = fallback
            LOGGER.info("Parser used JSON content fallback: tool=%s", call.tool_name)
            return Decision.with_tools(thought, [call])
        return Decision.final(content)

    def _parse_native_call(self, raw: Mapping[str, Any]) -> ToolCall:
        function_block = raw.get("function") or {}
        name = function_block.get("name")
        if not name:
            raise UpstreamProviderError(f"Missing tool name in tool call: {raw}")
        arguments_text = function_block.get("arguments") or ""
        try:
            arguments = json.loads(arguments_text) if arguments_text else {}
        except json.JSONDecodeError as exc:
            raise UpstreamProviderError(
                f"Tool call arguments for {name!r} are not valid JSON: {arguments_text}"
            ) from exc
        if not isinstance(arguments, dict):
            raise UpstreamProviderError(f"Tool call arguments for {name!r} must be an object.")
        return ToolCall(id=raw.get("id") or _new_call_id(), tool_name=name, parameters=arguments)

    def _parse_json_content(self, content: str) -> Optional[Tuple[str, ToolCall]]:
        text = content.strip()
        if not text.startswith("{"):
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict) or data.get("type") != "tool":
            return None
        tool_payload = data.get("tool")
        tool_name: Optional[str] = None
        if isinstance(tool_payload, str):
            tool_name = tool_payload
        elif isinstance(tool_payload, dict):
            tool_name = tool_payload.get("name")
        if not tool_name:
            return None
        tool_input = data.get("input") or data.get("parameters") or {}
        if not isinstance(tool_input, dict):
            return None
        thought = data.get("thought") or data.get("reasoning") or ""
        call = ToolCall(id=data.get("id") or _new_call_id(), tool_name=tool_name, parameters=tool_input)
        return str(thought), call


def build_tool_definitions(descriptors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Wrap descriptor dicts in the ``{"type": "function"}`` envelope."""
    return [{"type": "function", "function": descriptor} for descriptor in descriptors]


def _new_call_id() -> str:
    return f"tool_call_{uuid4().hex}"
