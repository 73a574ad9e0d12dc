"""
Tests for origin selection, the split policy and value sources.

This module verifies:
- resolve_origin() priority: invocations, value sources, environment, absent.
- split_origin(): element-wise splitting of direct and environment values,
  untouched sourced values.
- MapValueSource, TomlValueSource and ChainedValueSource lookups.
"""
from __future__ import annotations

import os
import re
import tempfile
import unittest
from unittest import TestCase

from optonaut import (
    Absent,
    ChainedValueSource,
    Context,
    Direct,
    EnvFallback,
    Invocation,
    MapValueSource,
    Sourced,
    TomlValueSource,
    option,
    resolve_origin,
    split_origin,
)


class ResolveOriginTest(TestCase):

    def setUp(self):
        self.descriptor = option("--name", envvar="NAME")

    def testInvocationsWin(self):
        context = Context(environ={"NAME": "env"}, sources=[MapValueSource({"name": "mapped"})])
        invocations = [Invocation("--name", ["cli"])]
        self.assertEqual(resolve_origin(context, self.descriptor, invocations), Direct(invocations))

    def testSourceBeforeEnvironment(self):
        context = Context(environ={"NAME": "env"}, sources=[MapValueSource({"name": "mapped"})])
        self.assertEqual(resolve_origin(context, self.descriptor, []), Sourced([Invocation.just("mapped")]))

    def testEnvironmentFallback(self):
        context = Context(environ={"NAME": "env"})
        self.assertEqual(resolve_origin(context, self.descriptor, []), EnvFallback("NAME", "env"))

    def testEmptyEnvironmentVariableIsPresent(self):
        context = Context(environ={"NAME": ""})
        self.assertEqual(resolve_origin(context, self.descriptor, []), EnvFallback("NAME", ""))

    def testAbsent(self):
        self.assertIs(resolve_origin(Context(environ={}), self.descriptor, []), Absent)

    def testNoEnvvarMeansNoEnvironmentLookup(self):
        descriptor = option("--name")
        self.assertIs(resolve_origin(Context(environ={"NAME": "x"}), descriptor, []), Absent)

    def testAbsentIsFalsy(self):
        self.assertFalse(Absent)
        self.assertEqual(repr(Absent), "absent")


class SplitOriginTest(TestCase):

    def setUp(self):
        self.comma = re.compile(",")

    def testDirectSplitElementWise(self):
        origin = Direct([Invocation("-x", ["a,b", "c"]), Invocation("--ex", ["d"])])
        self.assertEqual(split_origin(origin, self.comma), [
            Invocation("-x", ["a", "b", "c"]),
            Invocation("--ex", ["d"]),
        ])

    def testCapturedSeparatorsDropped(self):
        pattern = re.compile(r"\s*(,|;)\s*")
        origin = Direct([Invocation("-x", ["a, b;c"])])
        self.assertEqual(split_origin(origin, pattern), [Invocation("-x", ["a", "b", "c"])])
        self.assertEqual(split_origin(EnvFallback("X", "a;b"), pattern), [Invocation("X", ["a", "b"])])

    def testDirectWithoutPattern(self):
        invocations = [Invocation("-x", ["a,b"])]
        self.assertEqual(split_origin(Direct(invocations)), invocations)

    def testSourcedNeverSplit(self):
        invocations = [Invocation.just("a,b")]
        self.assertEqual(split_origin(Sourced(invocations), self.comma), invocations)

    def testEnvFallbackSplit(self):
        self.assertEqual(split_origin(EnvFallback("TAGS", "a,b"), self.comma), [Invocation("TAGS", ["a", "b"])])

    def testEnvFallbackWithoutPattern(self):
        self.assertEqual(split_origin(EnvFallback("TAGS", "a,b")), [Invocation("TAGS", ["a,b"])])

    def testAbsent(self):
        self.assertEqual(split_origin(Absent, self.comma), [])

    def testRejectsNonOrigins(self):
        with self.assertRaises(TypeError):
            split_origin([Invocation.just("a")])


class MapValueSourceTest(TestCase):

    def lookup(self, source, descriptor):
        return source.get_values(Context(environ={}), descriptor)

    def testKeyFromLongestName(self):
        source = MapValueSource({"output": "dist"})
        self.assertEqual(self.lookup(source, option("-o", "--output")), [Invocation.just("dist")])

    def testSourceKeyOverridesName(self):
        source = MapValueSource({"build": {"out": "dist"}})
        self.assertEqual(self.lookup(source, option("--output", source_key="build.out")), [Invocation.just("dist")])

    def testDashesNormalized(self):
        source = MapValueSource({"dry_run": True})
        self.assertEqual(self.lookup(source, option("--dry-run")), [Invocation.just("true")])

    def testNormalizationCanBeDisabled(self):
        source = MapValueSource({"dry_run": True}, normalize=False)
        self.assertEqual(self.lookup(source, option("--dry-run")), [])

    def testListsBecomeOneInvocationPerItem(self):
        source = MapValueSource({"include": ["a", "b"]})
        self.assertEqual(self.lookup(source, option("--include")), [Invocation.just("a"), Invocation.just("b")])

    def testListsStayTogetherForMultiValueOptions(self):
        source = MapValueSource({"tags": ["a", "b"]})
        self.assertEqual(self.lookup(source, option("--tags").split(",")), [Invocation("", ["a", "b"])])

    def testNestedListsBecomeMultiValueInvocations(self):
        source = MapValueSource({"point": [[1, 2], [3, 4]]})
        self.assertEqual(self.lookup(source, option("--point").pair()), [
            Invocation("", ["1", "2"]),
            Invocation("", ["3", "4"]),
        ])

    def testMissingAndNoneAreEmpty(self):
        source = MapValueSource({"name": None})
        self.assertEqual(self.lookup(source, option("--name")), [])
        self.assertEqual(self.lookup(source, option("--other")), [])


class TomlValueSourceTest(TestCase):

    DOCUMENT = '[tool.app]\nthreads = 4\nverbose = false\ntags = ["x", "y"]\n'

    def lookup(self, source, descriptor):
        return source.get_values(Context(environ={}), descriptor)

    def testRootedLookup(self):
        source = TomlValueSource(self.DOCUMENT, root="tool.app")
        self.assertEqual(self.lookup(source, option("--threads")), [Invocation.just("4")])
        self.assertEqual(self.lookup(source, option("--verbose")), [Invocation.just("false")])

    def testDottedLookupWithoutRoot(self):
        source = TomlValueSource(self.DOCUMENT)
        self.assertEqual(self.lookup(source, option("--threads", source_key="tool.app.threads")), [Invocation.just("4")])

    def testMissingRootIsEmpty(self):
        source = TomlValueSource(self.DOCUMENT, root="tool.other")
        self.assertEqual(self.lookup(source, option("--threads")), [])

    def testScalarRootIsEmpty(self):
        source = TomlValueSource("tool = 1", root="tool.build")
        self.assertEqual(self.lookup(source, option("--threads")), [])

    def testInvalidDocument(self):
        with self.assertRaises(ValueError):
            TomlValueSource("this is = = not toml")

    def testFromFile(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "config.toml")
            with open(path, "w", encoding="utf-8") as file:
                file.write(self.DOCUMENT)
            source = TomlValueSource.from_file(path, root="tool.app")
            self.assertEqual(self.lookup(source, option("--threads")), [Invocation.just("4")])

    def testMissingFile(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "absent.toml")
            self.assertEqual(self.lookup(TomlValueSource.from_file(path), option("--threads")), [])
            with self.assertRaises(FileNotFoundError):
                TomlValueSource.from_file(path, required=True)


class ChainedValueSourceTest(TestCase):

    def testFirstHitWins(self):
        chained = ChainedValueSource(MapValueSource({}), MapValueSource({"name": "b"}), MapValueSource({"name": "c"}))
        self.assertEqual(chained.get_values(Context(environ={}), option("--name")), [Invocation.just("b")])

    def testNoHit(self):
        chained = ChainedValueSource(MapValueSource({}))
        self.assertEqual(chained.get_values(Context(environ={}), option("--name")), [])


if __name__ == "__main__":
    unittest.main()
