"""
Namespace tree tests (insertion, lookup, full names, listings).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from trowel import Command, Namespace


class TestNamespace(TestCase):
    """Behavioral tests for the namespace tree."""

    def setUp(self):
        self.root = Namespace("default")
        self.a, self.b, self.c = Namespace("a"), Namespace("b"), Namespace("c")
        self.root.insert(self.a)
        self.a.insert(self.b)
        self.b.insert(self.c)

    def testFullNameSkipsRoot(self):
        self.assertEqual(self.c.full_name(), "a:b:c")
        self.assertEqual(self.root.full_name(), "")

    def testFullNameWithSuffix(self):
        self.assertEqual(self.c.full_name("zebra"), "a:b:c:zebra")

    def testInsertSetsParent(self):
        self.assertIs(self.b.parent, self.a)
        self.assertIsNone(self.root.parent)

    def testInsertReturnsSelf(self):
        namespace = Namespace("x")
        self.assertIs(self.root.insert(namespace), self.root)

    def testLookups(self):
        command = Command(name="ping", namespace=self.a)
        self.a.insert(command)
        self.assertIs(self.a.lookup_command("ping"), command)
        self.assertIs(self.root.lookup_namespace("a"), self.a)
        self.assertIsNone(self.a.lookup_command("pong"))
        self.assertIsNone(self.a.lookup_namespace("ping"))

    def testNamespaceAndCommandMayShareName(self):
        command = Command(name="b", namespace=self.a)
        self.a.insert(command)
        self.assertIs(self.a.lookup_command("b"), command)
        self.assertIs(self.a.lookup_namespace("b"), self.b)

    def testAncestorsNearestFirst(self):
        self.assertEqual(self.c.ancestors(), [self.b, self.a, self.root])

    def testCycleRejected(self):
        with self.assertRaises(ValueError):
            self.c.insert(self.a)
        with self.assertRaises(ValueError):
            self.a.insert(self.a)

    def testReparentingRejected(self):
        with self.assertRaises(ValueError):
            self.root.insert(self.b)

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Namespace(1)

    def testListCommandsWithDescriptions(self):
        self.root.insert(Command(name="zeta", description="Last", namespace=self.root))
        self.c.insert(Command(name="deep", description="Deep one", namespace=self.c))
        self.a.insert(Command(name="alpha", namespace=self.a))
        self.assertEqual(self.root.list_commands_with_descriptions(), [
            ("a:alpha", None),
            ("a:b:c:deep", "Deep one"),
            ("zeta", "Last"),
        ])

    def testListingFromSubtree(self):
        self.c.insert(Command(name="deep", description="Deep one", namespace=self.c))
        self.assertEqual(self.b.list_commands_with_descriptions(), [("a:b:c:deep", "Deep one")])


if __name__ == "__main__":
    unittest.main()
