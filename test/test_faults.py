"""
Tests for optonaut.faults.

This module verifies:
- The exception/warning taxonomy and their codes.
- Message formatting with and without an option name.
- copy.replace() keeping the concrete fault type.
- trigger(): raise/warn outside shell mode, render (and exit) in shell mode.
- OptionExit grouping.
"""
from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from optonaut.faults import *
from optonaut.faults import console


class TaxonomyTest(TestCase):

    def testBadValueFamily(self):
        for error in (InvalidArityError, InvalidChoiceError, FailedValidationError, DeprecatedOptionError):
            self.assertTrue(issubclass(error, BadValueError))
        self.assertTrue(issubclass(BadValueError, OptionException))

    def testMissingOptionIsNotABadValue(self):
        self.assertTrue(issubclass(MissingOptionError, OptionException))
        self.assertFalse(issubclass(MissingOptionError, BadValueError))

    def testWarnings(self):
        self.assertTrue(issubclass(DeprecatedOptionWarning, OptionWarning))
        self.assertTrue(issubclass(OptionWarning, Warning))

    def testGuardViolationIsAProgrammerError(self):
        self.assertTrue(issubclass(ResolutionGuardViolation, RuntimeError))
        self.assertFalse(issubclass(ResolutionGuardViolation, OptionException))

    def testCodes(self):
        self.assertIs(BadValueError("x").code, FaultCode.BAD_VALUE)
        self.assertIs(InvalidArityError("x").code, FaultCode.INVALID_ARITY)
        self.assertIs(MissingOptionError("x").code, FaultCode.MISSING_OPTION)
        self.assertEqual(DeprecatedOptionWarning("x").options["code"], FaultCode.DEPRECATED_OPTION_WARNING)

    def testCodeNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.BAD_VALUE.normalize(), "21101")

    def testGetdocWithoutHostDocs(self):
        self.assertIsNone(getdoc(FaultCode.BAD_VALUE))
        with self.assertRaises(TypeError):
            getdoc(21101)  # type: ignore[arg-type]


class MessageTest(TestCase):

    def testMessageWithoutOption(self):
        self.assertEqual(str(BadValueError("oops")), "oops")

    def testMessageWithOption(self):
        error = BadValueError("oops", option="--count")
        self.assertEqual(error.option, "--count")
        self.assertEqual(str(error), "invalid value for --count: oops")

    def testMissingAndDeprecatedKeepBareMessage(self):
        self.assertEqual(str(MissingOptionError("missing option --x", option="--x")), "missing option --x")
        self.assertEqual(str(DeprecatedOptionError("gone", option="--x")), "gone")

    def testReplaceKeepsType(self):
        error = InvalidChoiceError("bad", hint="pick another")
        replaced = copy.replace(error, option="--mode")
        self.assertIsInstance(replaced, InvalidChoiceError)
        self.assertEqual(replaced.option, "--mode")
        self.assertEqual(replaced.options["hint"], "pick another")
        self.assertIsNone(error.option)

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            BadValueError("x").options["option"] = "--x"  # type: ignore[index]

    def testFailHelper(self):
        with self.assertRaises(BadValueError) as context:
            fail("nope", "--x")
        self.assertEqual(context.exception.option, "--x")


class TriggerTest(TestCase):

    def testExceptionRaisedOutsideShell(self):
        with self.assertRaises(BadValueError) as context:
            trigger(BadValueError("oops"), option="--x")
        self.assertEqual(context.exception.option, "--x")

    def testExceptionExitsInShell(self):
        with console.capture() as capture:
            with self.assertRaises(SystemExit) as context:
                trigger(BadValueError("oops", option="--x"), shell=True, prog="tool")
        self.assertEqual(context.exception.code, 1)
        self.assertIn("oops", capture.get())

    def testDeferredExceptionDoesNotExit(self):
        with console.capture() as capture:
            trigger(BadValueError("later"), shell=True, deferred=True)
        self.assertIn("later", capture.get())

    def testWarningOutsideShell(self):
        with self.assertWarns(DeprecatedOptionWarning):
            trigger(DeprecatedOptionWarning("old", option="--x"))

    def testWarningPrintedInShell(self):
        with console.capture() as capture:
            trigger(OptionWarning("heads up"), shell=True, fancy=True)
        self.assertIn("heads up", capture.get())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))  # type: ignore[arg-type]


class OptionExitTest(TestCase):

    def testGroupsFaults(self):
        faults = [BadValueError("a", option="--a"), MissingOptionError("b", option="--b")]
        exit = OptionExit(faults)
        self.assertIsInstance(exit, ExceptionGroup)
        self.assertEqual(list(exit.exceptions), faults)

    def testRaisedOutsideShell(self):
        with self.assertRaises(OptionExit):
            trigger(OptionExit([BadValueError("a")]))

    def testExitsInShell(self):
        with console.capture() as capture:
            with self.assertRaises(SystemExit):
                trigger(OptionExit([BadValueError("first"), BadValueError("second")]), shell=True, fancy=True)
        output = capture.get()
        self.assertIn("first", output)
        self.assertIn("second", output)


if __name__ == "__main__":
    unittest.main()
