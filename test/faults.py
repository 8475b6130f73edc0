"""
Faults module tests.

Scope
- Validate declaration errors, fault codes and doc lookups.
- Validate trigger(): raising, option merging, shell-mode exit and warnings.
- Validate rich rendering of faults.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from contextlib import redirect_stderr
from unittest import TestCase

from rich.console import Console

from argosy.faults import *


def capture(renderable):
    console = Console(color_system=None, width=100)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestDeclarationErrors(TestCase):

    def testAreValueErrors(self):
        self.assertTrue(issubclass(InvalidIdentifierError, ValueError))
        self.assertTrue(issubclass(DuplicateIdentifierError, DeclarationError))

    def testOptionsAreReadOnly(self):
        error = DuplicateIdentifierError("clash", id="file")
        self.assertEqual(error.message, "clash")
        self.assertEqual(str(error), "clash")
        with self.assertRaises(TypeError):
            error.options["id"] = "other"


class TestFaultCode(TestCase):

    def testNormalize(self):
        self.assertEqual(FaultCode.MISSING_OPERAND.normalize(), str(FaultCode.MISSING_OPERAND.value))

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.UNRECOGNIZED_OPTION))
        with self.assertRaises(TypeError):
            getdoc(11112)


class TestTrigger(TestCase):

    def testRaisesWithMergedOptions(self):
        with self.assertRaises(MissingOperandError) as context:
            trigger(MissingOperandError("missing operand <file>", id="file"), hint="give a file")
        self.assertEqual(context.exception.options["id"], "file")
        self.assertEqual(context.exception.options["hint"], "give a file")
        self.assertEqual(str(context.exception), "missing operand <file>")

    def testChainsUnderlyingException(self):
        cause = ValueError("bad")
        with self.assertRaises(InvalidArgumentError) as context:
            trigger(InvalidArgumentError("invalid", exception=cause))
        self.assertIs(context.exception.__cause__, cause)

    def testOptionValueRequiredIsInvalidArgument(self):
        with self.assertRaises(InvalidArgumentError):
            trigger(OptionValueRequiredError("option '--name' requires a value"))

    def testShellExits(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            trigger(UnrecognizedOptionError("unrecognized option '--x'", title="unrecognized option"), shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("unrecognized option '--x'", stderr.getvalue())

    def testWarningsAreWarned(self):
        with self.assertWarns(EmptyOptionValueWarning):
            trigger(EmptyOptionValueWarning("empty inline value"))

    def testWarningsInShellArePrinted(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            trigger(EmptyOptionValueWarning("empty inline value"), shell=True)
        self.assertIn("empty inline value", stderr.getvalue())

    def testRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestRendering(TestCase):

    def testPlain(self):
        output = capture(MissingOperandError(
            "missing operand <file>",
            title="missing operand",
            code=FaultCode.MISSING_OPERAND,
            hint="provide a value for <file>",
        ))
        self.assertIn("Missing Operand", output)
        self.assertIn(str(FaultCode.MISSING_OPERAND.value), output)
        self.assertIn("missing operand <file>", output)
        self.assertIn("provide a value for <file>", output)

    def testFancy(self):
        output = capture(UnexpectedOperandError("unexpected operand(s) 'b'", title="unexpected operand", fancy=True))
        self.assertIn("Unexpected Operand", output)
        self.assertIn("unexpected operand(s) 'b'", output)


if __name__ == "__main__":
    unittest.main()
