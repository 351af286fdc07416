"""
Execution loop that drives the agent using a provider and registered tools.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..primitives.actions import Decision, InvocationOutcome, ToolCall
from ..primitives.context import RunContext
from ..primitives.errors import IterationExceeded, OperationCancelled, UpstreamProviderError
from ..primitives.memory import ConversationMemory
from ..primitives.messages import ChatMessage, assistant_message, user_message
from ..primitives.tools import ToolRegistry
from ...llm.base import Provider

DEFAULT_MAX_ROUNDS = 10


@dataclass
class AgentConfig:
    max_rounds: int = DEFAULT_MAX_ROUNDS
    parallel_tool_calls: bool = False
    max_workers: int = 4

    def __post_init__(self) -> None:
        if self.max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")


def format_tool_calls(decision: Decision) -> str:
    return f"Tool calls: {decision.content}"


def format_tool_results(outcomes: Sequence[InvocationOutcome]) -> str:
    lines = [outcome.render() for outcome in outcomes]
    return "Tool results:\n" + "\n".join(lines)


class AgentExecutor:
    """
    Runs the decide / execute / fold cycle over a conversation memory.

    The executor itself is stateless between runs and may be shared; the
    memory passed to ``run`` must not be used by another caller meanwhile.
    """

    def __init__(
        self,
        provider: Provider,
        tools: ToolRegistry,
        *,
        config: Optional[AgentConfig] = None,
    ) -> None:
        self.provider = provider
        self.tools = tools
        self.config = config or AgentConfig()
        self._logger = logging.getLogger(__name__)

    def run(self, context: RunContext, memory: ConversationMemory) -> str:
        self._logger.info(
            "\n%s\n[EXECUTION START]\nMax rounds: %d\n%s",
            "=" * 80,
            self.config.max_rounds,
            "=" * 80,
        )
        self._logger.debug(
            "\n%s\n[MEMORY SNAPSHOT]\n%s\n%s",
            "-" * 80,
            self._format_memory(memory.snapshot()),
            "-" * 80,
        )

        for round_number in range(1, self.config.max_rounds + 1):
            decision = self._decide(context, memory)
            if decision.is_final:
                self._logger.info(
                    "\n%s\n[ROUND %d] FINAL ANSWER RECEIVED\n%s\n%s",
                    "=" * 80,
                    round_number,
                    decision.content.strip(),
                    "=" * 80,
                )
                memory.append(assistant_message(decision.content))
                return decision.content

            outcomes = self._execute_round(context, round_number, decision.tool_calls)
            # 整轮完成后才写入记忆，取消时不留下半轮结果
            memory.extend(
                [
                    assistant_message(format_tool_calls(decision)),
                    user_message(format_tool_results(outcomes)),
                ]
            )

        self._logger.warning("Max rounds (%d) exceeded without a final answer", self.config.max_rounds)
        raise IterationExceeded(self.config.max_rounds)

    def _decide(self, context: RunContext, memory: ConversationMemory) -> Decision:
        context.check()
        descriptors = self.tools.describe()
        try:
            decision = self.provider.complete(context, memory.snapshot(), descriptors)
        except OperationCancelled:
            raise
        except Exception as exc:
            if context.cancelled:
                raise OperationCancelled("cancelled during provider call") from exc
            if isinstance(exc, UpstreamProviderError):
                raise
            self._logger.exception("Provider call failed")
            raise UpstreamProviderError(f"LLM completion failed: {exc}") from exc
        context.check()
        if not isinstance(decision, Decision):
            raise UpstreamProviderError(f"Provider returned {type(decision).__name__}, expected Decision")
        return decision

    def _execute_round(
        self,
        context: RunContext,
        round_number: int,
        calls: Sequence[ToolCall],
    ) -> List[InvocationOutcome]:
        self._logger.info(
            "\n%s\n[ROUND %d] TOOL ACTIONS\n%s\n%s",
            "-" * 80,
            round_number,
            "\n".join(
                f"{call.id}: {call.tool_name} {json.dumps(dict(call.parameters), ensure_ascii=False, default=str)}"
                for call in calls
            ),
            "-" * 80,
        )
        if self.config.parallel_tool_calls and len(calls) > 1:
            workers = min(self.config.max_workers, len(calls))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(self._invoke, context, call) for call in calls]
                try:
                    outcomes = [future.result() for future in futures]
                except OperationCancelled:
                    for future in futures:
                        future.cancel()
                    raise
        else:
            outcomes = [self._invoke(context, call) for call in calls]
        context.check()
        return outcomes

    def _invoke(self, context: RunContext, call: ToolCall) -> InvocationOutcome:
        context.check()
        try:
            value = self.tools.execute(call.tool_name, call.parameters, context)
        except OperationCancelled:
            raise
        except Exception as exc:
            self._logger.warning("Tool %s (%s) failed: %s", call.tool_name, call.id, exc)
            return InvocationOutcome(call=call, error=str(exc))
        outcome = InvocationOutcome(call=call, value=value)
        self._logger.info("[TOOL RESULT] %s", outcome.render()[:500])
        return outcome

    def _format_memory(self, messages: Sequence[ChatMessage]) -> str:
        if not messages:
            return "(no history)"
        return "\n".join(
            f"[{message.role.value}] {_clip(message.content)}" for message in messages
        )


def _clip(text: str, limit: int = 160) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[: limit - 3] + "..."
