"""
Command tests (execution flow, parameters, results).

Scope
- Validate argv-style execution and pre-parsed execution.
- Validate raw/unparsed bookkeeping and the parser built on first use.
- Validate that errors from the parser and the body propagate unchanged.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from trowel import Command, Namespace, Parameter, Runner
from trowel.faults import MissingParametersError


def greet(context):
    return "hello, " + context.params["name"]


class TestCommand(TestCase):
    """Behavioral tests for Command."""

    def testGreetEndToEnd(self):
        command = Command(name="greet", parameters=[Parameter("name")], body=greet)
        self.assertEqual(command.execute_with_params({"name": "world"}), "hello, world")

    def testExecuteWithSwitches(self):
        command = Command(name="greet", parameters=[Parameter("name")], body=greet)
        self.assertEqual(command.execute("--name", "you"), "hello, you")
        self.assertEqual(command.execute(["-n", "again"]), "hello, again")

    def testRawAndUnparsedParams(self):
        command = Command(name="greet", parameters=[Parameter("name")], body=greet)
        command.execute("extra", "--name", "you", "more")
        self.assertEqual(command.raw_params, ["extra", "--name", "you", "more"])
        self.assertEqual(command.unparsed_params, ["extra", "more"])
        self.assertEqual(command.params, {"name": "you"})

    def testZeroParameterCommandKeepsInputUnparsed(self):
        seen = []
        command = Command(name="echo", body=lambda context: seen.append(context.unparsed_params))
        command.execute("--anything", "goes")
        self.assertEqual(seen, [["--anything", "goes"]])
        self.assertEqual(command.params, {})

    def testDefaultsReachTheBody(self):
        command = Command(
            name="deploy",
            parameters=[Parameter("region", default="west")],
            body=lambda context: context.params["region"],
        )
        self.assertEqual(command.execute(), "west")
        self.assertEqual(command.execute("-r", "east"), "east")

    def testMissingParametersPropagate(self):
        command = Command(name="greet", parameters=[Parameter("name")], body=greet)
        with self.assertRaises(MissingParametersError):
            command.execute()

    def testBodyErrorsPropagate(self):
        def body(context):
            raise LookupError("boom")

        with self.assertRaises(LookupError):
            Command(name="fail", body=body).execute()

    def testMissingBodyRaises(self):
        with self.assertRaises(TypeError):
            Command(name="empty").execute()

    def testParserIsBuiltOnce(self):
        region = Parameter("region", default="west")
        command = Command(name="deploy", parameters=[region], body=lambda context: None)
        command.execute()
        region.short = None
        command.execute()
        self.assertEqual(command.parser.switches["-r"].name, "region")

    def testFullNameFollowsNamespace(self):
        root, servers = Namespace("default"), Namespace("servers")
        root.insert(servers)
        self.assertEqual(Command(name="create", namespace=servers).full_name, "servers:create")
        self.assertEqual(Command(name="create").full_name, "create")

    def testUsageUsesFullName(self):
        runner = Runner(prog="tool", command_paths=[])
        with runner.in_namespace("servers"):
            runner.describe("Create a server")
            runner.parameter("name")
            command = runner.command("create", greet)
        self.assertTrue(command.usage().startswith("Create a server\n\nUSAGE: servers:create [options]\n"))

    def testContextReceivesRunner(self):
        runner = Runner(prog="tool", command_paths=[])
        command = runner.command("whoami", lambda context: context.runner)
        self.assertIs(command.execute(), runner)

    def testAddParameter(self):
        command = Command(name="greet", body=greet)
        parameter = command.add_parameter(Parameter("name"))
        self.assertEqual(command.parameters, [parameter])


if __name__ == "__main__":
    unittest.main()
