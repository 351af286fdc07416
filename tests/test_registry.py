import threading
import unittest

from toolbox_agent.core.primitives import (
    DuplicateNameError,
    FunctionTool,
    NotFoundError,
    RunContext,
    Tool,
    ToolExecutionError,
    ToolRegistry,
    ValidationError,
)


def echo_tool(name="echo", description="Echo the input back"):
    return FunctionTool(
        name=name,
        description=description,
        func=lambda arguments: {"echo": arguments.get("text")},
        parameters={
            "type": "object",
            "properties": {"text": {"type": "string"}},
            "required": ["text"],
        },
    )


class MutableSchemaTool(Tool):
    name = "mutable"
    description = "Tool whose schema changes over time"

    def __init__(self):
        self.version = 1

    def schema(self):
        return {"type": "object", "properties": {}, "x-version": self.version}

    def execute(self, context, parameters):
        return self.version


class BlockingTool(Tool):
    name = "blocking"
    description = "Blocks until released"

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()

    def schema(self):
        return {"type": "object", "properties": {}}

    def execute(self, context, parameters):
        self.started.set()
        self.release.wait(timeout=5)
        return "released"


class TestToolRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = ToolRegistry()

    def test_duplicate_registration_keeps_first(self):
        first = echo_tool(description="first")
        second = echo_tool(description="second")
        self.registry.register(first)

        with self.assertRaises(DuplicateNameError):
            self.registry.register(second)

        self.assertIs(self.registry.get("echo"), first)
        self.assertEqual(self.registry.list_tools(), [first])
        self.assertEqual(len(self.registry), 1)

    def test_get_unknown_name(self):
        with self.assertRaises(NotFoundError):
            self.registry.get("nope")

    def test_execute_unknown_name_leaves_registry_unchanged(self):
        self.registry.register(echo_tool())
        with self.assertRaises(NotFoundError):
            self.registry.execute("nope", {})
        self.assertEqual(self.registry.names(), ["echo"])

    def test_execute_dispatches_to_tool(self):
        self.registry.register(echo_tool())
        result = self.registry.execute("echo", {"text": "hi"}, RunContext())
        self.assertEqual(result, {"echo": "hi"})

    def test_describe_single_tool_matches_tool(self):
        tool = echo_tool()
        self.registry.register(tool)

        descriptors = self.registry.describe()

        self.assertEqual(len(descriptors), 1)
        descriptor = descriptors[0]
        self.assertEqual(descriptor.name, tool.name)
        self.assertEqual(descriptor.description, tool.description)
        self.assertEqual(descriptor.parameters, tool.schema())
        self.assertEqual(
            descriptor.to_dict(),
            {"name": "echo", "description": "Echo the input back", "parameters": tool.schema()},
        )

    def test_describe_is_sorted_by_name(self):
        self.registry.register(echo_tool("zeta"))
        self.registry.register(echo_tool("alpha"))
        self.assertEqual([d.name for d in self.registry.describe()], ["alpha", "zeta"])

    def test_describe_rebuilds_schema_each_time(self):
        tool = MutableSchemaTool()
        self.registry.register(tool)
        self.assertEqual(self.registry.describe()[0].parameters["x-version"], 1)
        tool.version = 2
        self.assertEqual(self.registry.describe()[0].parameters["x-version"], 2)

    def test_update_is_atomic(self):
        self.registry.register(echo_tool("taken"))
        with self.assertRaises(DuplicateNameError):
            self.registry.update([echo_tool("fresh"), echo_tool("taken")])
        self.assertNotIn("fresh", self.registry)

        with self.assertRaises(DuplicateNameError):
            self.registry.update([echo_tool("twin"), echo_tool("twin")])
        self.assertNotIn("twin", self.registry)

        self.registry.update([echo_tool("a"), echo_tool("b")])
        self.assertEqual(sorted(self.registry.names()), ["a", "b", "taken"])

    def test_register_rejects_nameless_tool(self):
        with self.assertRaises(ValueError):
            self.registry.register(echo_tool(name=""))

    def test_concurrent_registration_of_same_name(self):
        results = []
        lock = threading.Lock()

        def worker(index):
            try:
                self.registry.register(echo_tool(description=f"worker {index}"))
                outcome = "ok"
            except DuplicateNameError:
                outcome = "duplicate"
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(results.count("ok"), 1)
        self.assertEqual(results.count("duplicate"), 19)
        self.assertEqual(len(self.registry), 1)

    def test_slow_tool_does_not_block_registration(self):
        blocking = BlockingTool()
        self.registry.register(blocking)
        runner = threading.Thread(target=self.registry.execute, args=("blocking", {}))
        runner.start()
        try:
            self.assertTrue(blocking.started.wait(timeout=5))
            self.registry.register(echo_tool())
            self.assertIn("echo", self.registry)
            self.assertEqual(len(self.registry.describe()), 2)
        finally:
            blocking.release.set()
            runner.join(timeout=5)


class TestFunctionTool(unittest.TestCase):

    def test_missing_required_parameter(self):
        with self.assertRaises(ValidationError):
            echo_tool().execute(RunContext(), {})

    def test_failure_is_wrapped(self):
        def explode(arguments):
            raise KeyError("boom")

        tool = FunctionTool(name="explode", description="Always fails", func=explode)
        with self.assertRaises(ToolExecutionError) as caught:
            tool.execute(RunContext(), {})
        self.assertIn("explode", str(caught.exception))
        self.assertIsInstance(caught.exception.__cause__, KeyError)

    def test_default_schema(self):
        tool = FunctionTool(name="noop", description="Does nothing", func=lambda arguments: None)
        self.assertEqual(tool.schema(), {"type": "object", "properties": {}})


if __name__ == "__main__":
    unittest.main()
