"""
Keyword-driven provider for local runs and tests.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.primitives.actions import Decision, ToolCall
from ..core.primitives.context import RunContext
from ..core.primitives.messages import ChatMessage, MessageRole
from ..core.primitives.tools import ToolDescriptor
from .base import Provider

QUERY_TOOL_NAME = "query_database"


class MockProvider(Provider):
    """
    Pretends to be a language model by looking for keywords in the most
    recent user message.

    - "list" + "task": query the tasks table
    - "note": query the notes table
    - "tool result": summarize the folded results as the final answer
    - anything else: final answer listing the available tools
    """

    def complete(
        self,
        context: RunContext,
        history: Sequence[ChatMessage],
        tools: Sequence[ToolDescriptor],
    ) -> Decision:
        context.check()
        last = (_last_user_content(history) or "").lower()

        if "tool result" in last:
            return Decision.final(f"Here are the results from the database query: {last}")
        if "task" in last and "list" in last:
            return Decision.with_tools(
                "I'll query the database for tasks",
                [
                    ToolCall(
                        id="call_1",
                        tool_name=QUERY_TOOL_NAME,
                        parameters={"query": "SELECT * FROM tasks ORDER BY created_at DESC"},
                    )
                ],
            )
        if "note" in last:
            return Decision.with_tools(
                "I'll query the database for notes",
                [
                    ToolCall(
                        id="call_2",
                        tool_name=QUERY_TOOL_NAME,
                        parameters={"query": "SELECT * FROM notes ORDER BY created_at DESC"},
                    )
                ],
            )

        names = [tool.name for tool in tools]
        return Decision.final(
            f"I'm a mock LLM provider. Available tools: {names}. "
            "Try asking about 'tasks' or 'notes'."
        )


def _last_user_content(history: Sequence[ChatMessage]) -> Optional[str]:
    for message in reversed(history):
        if message.role is MessageRole.USER:
            return message.content
    return None
