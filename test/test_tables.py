"""
Table view tests (padding, flattening, faults).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from trowel import TableView
from trowel.faults import InvalidDataForColumnsError


class TestTableView(TestCase):
    """Behavioral tests for TableView rendering."""

    def testColumnsArePadded(self):
        table = TableView(headers=("Command", "Description"))
        table.add_record("ls", "List")
        table.add_record("servers:create", None)
        self.assertEqual(str(table), "\n".join([
            "Command        | Description",
            "ls             | List       ",
            "servers:create |            ",
        ]) + "\n\n")

    def testTitleLine(self):
        table = TableView(title="tool commands:", headers=["A"], divider="\t")
        table.add_record("x")
        self.assertEqual(str(table), "tool commands:\nA\nx\n\n")

    def testAddHeaderAndRecordFlatten(self):
        table = TableView()
        table.add_header(["a", "b"], "c")
        table.add_record([1, 2], 3)
        self.assertEqual(table.headers, ["a", "b", "c"])
        self.assertEqual(table.records, [["1", "2", "3"]])

    def testWrongValueCountRaises(self):
        table = TableView(headers=("a", "b"))
        with self.assertRaises(InvalidDataForColumnsError) as caught:
            table.add_record("only")
        self.assertEqual((caught.exception.values, caught.exception.columns), (1, 2))

    def testMutableFields(self):
        table = TableView(headers=("a", "b"))
        table.divider = ","
        table.add_record("1", "2")
        self.assertEqual(str(table), "a,b\n1,2\n\n")

    def testRichConsolePrint(self):
        table = TableView(headers=("Name",))
        table.add_record("[bold]literal[/bold]")
        output = io.StringIO()
        Console(file=output, width=80).print(table)
        self.assertIn("[bold]literal[/bold]", output.getvalue())


if __name__ == "__main__":
    unittest.main()
