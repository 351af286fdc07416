import json
import time
import unittest

from toolbox_agent.core.primitives import (
    ConversationMemory,
    Decision,
    InvocationOutcome,
    OperationCancelled,
    RunContext,
    ToolCall,
    ToolExecutionError,
    user_message,
)
from toolbox_agent.core.primitives.context import background


class TestRunContext(unittest.TestCase):

    def test_background_never_cancels(self):
        ctx = background()
        ctx.check()
        self.assertFalse(ctx.cancelled)
        self.assertIsNone(ctx.remaining())

    def test_cancel_with_reason(self):
        ctx = RunContext()
        ctx.cancel("shutting down")
        self.assertTrue(ctx.cancelled)
        with self.assertRaises(OperationCancelled) as caught:
            ctx.check()
        self.assertIn("shutting down", str(caught.exception))

    def test_deadline(self):
        ctx = RunContext(timeout=0.01)
        time.sleep(0.02)
        self.assertTrue(ctx.cancelled)
        self.assertEqual(ctx.remaining(), 0.0)
        with self.assertRaises(OperationCancelled) as caught:
            ctx.check()
        self.assertIn("deadline", str(caught.exception))

    def test_remaining_counts_down(self):
        ctx = RunContext(timeout=60)
        self.assertGreater(ctx.remaining(), 0)
        self.assertLessEqual(ctx.remaining(), 60)


class TestDecisionAndOutcome(unittest.TestCase):

    def test_final_decision(self):
        decision = Decision.final("done")
        self.assertTrue(decision.is_final)
        self.assertEqual(decision.tool_calls, ())

    def test_tool_decision(self):
        decision = Decision.with_tools("go", [ToolCall(id="1", tool_name="t", parameters={})])
        self.assertFalse(decision.is_final)
        self.assertIsInstance(decision.tool_calls, tuple)

    def test_render_success_keeps_unicode(self):
        outcome = InvocationOutcome(
            call=ToolCall(id="1", tool_name="query_database", parameters={}),
            value={"rows": [{"title": "café"}], "count": 1},
        )
        self.assertTrue(outcome.ok)
        rendered = outcome.render()
        self.assertTrue(rendered.startswith("query_database result: "))
        self.assertIn("café", rendered)
        self.assertEqual(json.loads(rendered.split(": ", 1)[1])["count"], 1)

    def test_render_falls_back_to_text_for_unencodable_values(self):
        circular = []
        circular.append(circular)
        outcome = InvocationOutcome(call=ToolCall(id="1", tool_name="echo", parameters={}), value=circular)
        self.assertEqual(outcome.render(), "echo result: [[...]]")

    def test_render_error(self):
        outcome = InvocationOutcome(
            call=ToolCall(id="1", tool_name="query_database", parameters={}),
            error=str(ToolExecutionError("query execution failed: no such table: t")),
        )
        self.assertFalse(outcome.ok)
        self.assertEqual(
            outcome.render(),
            "Error executing query_database: query execution failed: no such table: t",
        )


class TestConversationMemory(unittest.TestCase):

    def test_snapshot_is_a_copy(self):
        memory = ConversationMemory()
        memory.append(user_message("hi"))
        snapshot = memory.snapshot()
        snapshot.append(user_message("extra"))
        self.assertEqual(len(memory), 1)

    def test_clear(self):
        memory = ConversationMemory()
        memory.extend([user_message("a"), user_message("b")])
        self.assertEqual(memory.last().content, "b")
        memory.clear()
        self.assertEqual(len(memory), 0)


if __name__ == "__main__":
    unittest.main()
