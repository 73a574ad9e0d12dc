"""
Tests for the small building blocks in optonaut.utils.

This module verifies:
- The Unset sentinel (singleton identity, falsiness, copying, pickling, finality).
- coalesce() replacing only the sentinel.
- rename() in both call and decorator forms.
- freeze()/view() read-only snapshots.
- longest() display-name selection.
"""
from __future__ import annotations

import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from optonaut.utils import *


class UnsetTest(TestCase):
    """Semantic guarantees of the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButNotNone(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)
        self.assertNotEqual(Unset, "")

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTripPreservesIdentity(self):
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Sub(UnsetType):  # NOQA: F-841
                pass

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | UnsetType)
        self.assertIsInstance("x", str | UnsetType)


class CoalesceTest(TestCase):

    def testReplacesUnsetOnly(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        for value in (None, 0, "", [], False):
            self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testCallForm(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecoratorForm(self):
        @rename("decorated")
        def function():
            pass

        self.assertEqual(function.__name__, "decorated")

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(42, "name")

    def testRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename(42)

    def testRejectsBadArity(self):
        with self.assertRaises(TypeError):
            rename()


class FreezeTest(TestCase):

    def testSequenceBecomesTuple(self):
        self.assertEqual(freeze([1, 2]), (1, 2))

    def testStringsUntouched(self):
        self.assertEqual(freeze("abc"), "abc")

    def testRangesUntouched(self):
        self.assertEqual(freeze(range(1, 3)), range(1, 3))

    def testMappingBecomesProxy(self):
        frozen = freeze({"a": 1})
        self.assertIsInstance(frozen, MappingProxyType)
        with self.assertRaises(TypeError):
            frozen["b"] = 2  # type: ignore[index]

    def testMappingSnapshotIsDetached(self):
        source = {"a": 1}
        frozen = freeze(source)
        source["b"] = 2
        self.assertNotIn("b", frozen)

    def testSetBecomesFrozenset(self):
        self.assertEqual(freeze({1, 2}), frozenset({1, 2}))


class ViewTest(TestCase):

    def testViewReturnsFrozenSnapshot(self):
        class Holder:
            items = view("items")

            def __init__(self):
                self._items = [1, 2]

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        with self.assertRaises(AttributeError):
            holder.items = []  # type: ignore[misc]


class LongestTest(TestCase):

    def testLongestWins(self):
        self.assertEqual(longest({"-o", "--output"}), "--output")

    def testTiesBrokenAlphabetically(self):
        self.assertEqual(longest({"--bb", "--aa"}), "--aa")

    def testEmpty(self):
        self.assertIsNone(longest(()))


if __name__ == "__main__":
    unittest.main()
