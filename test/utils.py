"""
Shared helper tests.

Scope
- Validate the Unset marker, coalesce(), rename() and mirror().

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from unittest import TestCase

from argosy.utils import Unset, coalesce, mirror, rename


class Holder:
    items = mirror("items")
    pair = mirror("pair")

    def __init__(self):
        self._items = [[1], [2]]
        self._pair = (1, 2)


class TestUnset(TestCase):
    """Behavioral tests for the Unset marker."""

    def testFalsyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testSingleInstance(self):
        self.assertIs(type(Unset)(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy({"a": Unset})["a"], Unset)

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Other", (type(Unset),), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, 3), 3)
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, 3))
        self.assertEqual(coalesce(0, 3), 0)


class TestHelpers(TestCase):
    """Behavioral tests for rename() and mirror()."""

    def testRename(self):
        @rename("__repr__")
        def function():
            pass
        self.assertEqual(function.__name__, "__repr__")
        self.assertEqual(function.__qualname__, "__repr__")
        with self.assertRaises(TypeError):
            rename(function)

    def testMirrorHandsOutCopies(self):
        holder = Holder()
        holder.items[0].append(9)
        self.assertEqual(holder.items, [[1], [2]])
        self.assertIs(holder.pair, holder._pair)

    def testMirrorIsReadOnly(self):
        with self.assertRaises(AttributeError):
            Holder().items = []


if __name__ == "__main__":
    unittest.main()
