"""
Utility tests (sentinel, copies, metaclass).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from trowel.utils import (
    IntrospectableType,
    Unset,
    UnsetType,
    coalesce,
    flatten,
    rename,
)


class Sample(metaclass=IntrospectableType):
    __introspectable__ = ("items",)
    __mutable__ = ("label",)

    def __init__(self):
        self._items = [1, 2]
        self._label = "x"


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalseyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testUnionIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "west"), "west")
        self.assertIsNone(coalesce(None, "west"))
        self.assertEqual(coalesce(0, 5), 0)


class TestHelpers(TestCase):
    """rename, flatten and the introspectable metaclass."""

    def testFlatten(self):
        self.assertEqual(list(flatten(["a", ["b", ("c", ["d"])], {"e": 1}])), ["a", "b", "c", "d", {"e": 1}])

    def testRenameForms(self):
        def f():
            pass

        self.assertEqual(rename(f, "g").__qualname__, "g")

        @rename("h")
        def i():
            pass

        self.assertEqual(i.__name__, "h")

    def testRenameRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(1, "x")

    def testMirroredFieldsAreCopies(self):
        sample = Sample()
        sample.items.append(3)
        self.assertEqual(sample.items, [1, 2])
        with self.assertRaises(AttributeError):
            sample.items = []
        sample.label = "y"
        self.assertEqual(sample.label, "y")

    def testTypenameAndRepr(self):
        self.assertEqual(Sample.__typename__, "sample")
        self.assertEqual(repr(Sample()), "sample(items=[1, 2], label='x')")



if __name__ == "__main__":
    unittest.main()
