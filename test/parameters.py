"""
Parameter model tests.

Scope
- Validate Operand/Option construction: ids, arity, value types, defaults, settings.
- Validate shorthand positionals and declaration errors.
- Validate the standard conversion and zero values.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API only.
"""
import unittest
from enum import Enum
from pathlib import Path
from unittest import TestCase

from argosy import Operand, Option, ValueKind, Arity, Category, Desc, Help, Required, InvalidIdentifierError
from argosy.parameters import convert, zero


class Color(Enum):
    RED = "r"
    GREEN = "g"


def join(tokens: list[str]) -> str:
    return ",".join(tokens)


def level(token: str) -> int:
    return {"low": 1, "high": 9}[token]


def swap(pair: tuple[str, str]) -> tuple[str, str]:
    return pair[1], pair[0]


class TestOperand(TestCase):
    """Behavioral tests for Operand specifications."""

    def testScalarDefaults(self):
        operand = Operand("file")
        self.assertEqual(operand.name, "file")
        self.assertEqual(operand.id, "file")
        self.assertIs(operand.type, str)
        self.assertIs(operand.arity.kind, ValueKind.SINGLE)
        self.assertEqual(operand.default, "")
        self.assertEqual(operand.value, "")

    def testIdDerivedFromName(self):
        self.assertEqual(Operand("input-file").id, "inputFile")
        self.assertEqual(Operand("class").id, "_class")

    def testExplicitId(self):
        self.assertEqual(Operand("input file", id="source").id, "source")

    def testExplicitIdValidated(self):
        with self.assertRaises(InvalidIdentifierError):
            Operand("file", id="9")

    def testUnderivableNameRejected(self):
        with self.assertRaises(InvalidIdentifierError):
            Operand("input file")

    def testNameValidated(self):
        with self.assertRaises(ValueError):
            Operand("  ")
        with self.assertRaises(TypeError):
            Operand(1)

    def testListArity(self):
        operand = Operand("files", list[str])
        self.assertIs(operand.arity.kind, ValueKind.LIST)
        self.assertEqual(operand.value, [])

    def testVariadicTupleIsList(self):
        operand = Operand("numbers", tuple[int, ...])
        self.assertIs(operand.arity.kind, ValueKind.LIST)
        self.assertEqual(operand.default, ())

    def testFixedArity(self):
        operand = Operand("point", type=tuple[int, float])
        self.assertEqual(operand.arity, Arity(ValueKind.FIXED, 2))
        self.assertEqual(operand.default, (0, 0.0))

    def testProcessorPicksArity(self):
        operand = Operand("files", processor=join)
        self.assertIs(operand.arity.kind, ValueKind.LIST)
        self.assertIs(operand.type, str)
        self.assertEqual(operand.default, "")

    def testProcessorFixedArity(self):
        self.assertEqual(Operand("pair", swap).arity, Arity(ValueKind.FIXED, 2))

    def testUnannotatedProcessorIsSingle(self):
        operand = Operand("word", lambda token: token.upper())
        self.assertIs(operand.arity.kind, ValueKind.SINGLE)
        self.assertIsNone(operand.default)

    def testTypeAndProcessorExclusive(self):
        with self.assertRaises(TypeError):
            Operand("file", str, processor=join)

    def testOperandsTakeNoDefault(self):
        with self.assertRaises(TypeError):
            Operand("count", int, 3)

    def testSettings(self):
        operand = Operand("files", list[str], Desc("files to read"), Category("input"), Required())
        self.assertEqual(operand.desc, "files to read")
        self.assertEqual(operand.category, "input")
        self.assertEqual(operand.help, "")
        self.assertTrue(operand.required)

    def testSettingsAnywhere(self):
        operand = Operand("file", Desc("input"), Path)
        self.assertIs(operand.type, Path)
        self.assertEqual(operand.desc, "input")

    def testReadOnly(self):
        operand = Operand("file")
        with self.assertRaises(AttributeError):
            operand.name = "other"

    def testRepr(self):
        self.assertTrue(repr(Operand("file")).startswith("operand(name='file', id='file'"))


class TestOption(TestCase):
    """Behavioral tests for Option specifications."""

    def testNames(self):
        option = Option("verbose|v|garrulous")
        self.assertEqual(option.spec, "verbose|v|garrulous")
        self.assertEqual(option.long, "verbose")
        self.assertEqual(option.short, "v")
        self.assertEqual(option.aliases, ("garrulous",))
        self.assertEqual(option.id, "verbose")

    def testBoolIsSwitch(self):
        option = Option("verbose|v", bool, False)
        self.assertTrue(option.switch)
        self.assertIs(option.default, False)
        self.assertTrue(option.declared)

    def testStringIsDefaultType(self):
        option = Option("name")
        self.assertIs(option.type, str)
        self.assertEqual(option.default, "")
        self.assertFalse(option.switch)
        self.assertFalse(option.declared)

    def testTypeInferredFromDefault(self):
        option = Option("count", 3)
        self.assertIs(option.type, int)
        self.assertEqual(option.default, 3)

    def testTypeInferredFromListDefault(self):
        option = Option("nums", [1, 2])
        self.assertEqual(option.type, list[int])
        self.assertIs(option.arity.kind, ValueKind.LIST)
        self.assertEqual(option.default, [1, 2])
        self.assertEqual(Option("names", []).type, list)

    def testTupleDefaultTreatedAsFixedTuple(self):
        with self.assertRaises(TypeError):
            Option("point", (1, 2))
        self.assertIs(Option("tags", ()).arity.kind, ValueKind.LIST)

    def testTypeInferredFromProcessor(self):
        option = Option("level", processor=level)
        self.assertIs(option.type, int)
        self.assertEqual(option.default, 0)
        self.assertFalse(option.switch)

    def testIncrementable(self):
        option = Option("verbose|v+")
        self.assertTrue(option.incrementable)
        self.assertTrue(option.switch)
        self.assertIs(option.type, int)
        self.assertEqual(option.default, 0)

    def testIncrementableMustBeInteger(self):
        with self.assertRaises(TypeError):
            Option("verbose|v+", str)
        with self.assertRaises(TypeError):
            Option("verbose|v+", processor=level)

    def testListOption(self):
        option = Option("include|I", list[str])
        self.assertIs(option.arity.kind, ValueKind.LIST)
        self.assertEqual(option.default, [])

    def testFixedTupleRejected(self):
        with self.assertRaises(TypeError):
            Option("point", tuple[int, int])

    def testDuplicatedArgumentsRejected(self):
        with self.assertRaises(TypeError):
            Option("count", int, type=int)
        with self.assertRaises(TypeError):
            Option("count", 1, default=2)

    def testTooManyPositionals(self):
        with self.assertRaises(TypeError):
            Option("count", int, 1, 2)

    def testIdDerivedFromLongName(self):
        self.assertEqual(Option("long-name|l").id, "longName")
        self.assertEqual(Option("version|V").id, "_version")

    def testEmptyLongNameRejected(self):
        with self.assertRaises(InvalidIdentifierError):
            Option("|v")

    def testSpecMustBeString(self):
        with self.assertRaises(TypeError):
            Option(None)

    def testSettings(self):
        option = Option("output|o", Desc("output file"), Help("defaults to stdout"), Category("io"))
        self.assertEqual(option.desc, "output file")
        self.assertEqual(option.help, "defaults to stdout")
        self.assertEqual(option.category, "io")

    def testRequiredRejected(self):
        with self.assertRaises(TypeError):
            Option("output|o", Required())
        self.assertEqual(Option("output|o", Required(False)).id, "output")

    def testReadOnly(self):
        option = Option("verbose|v", bool)
        with self.assertRaises(AttributeError):
            option.long = "quiet"

    def testRepr(self):
        self.assertTrue(repr(Option("verbose|v", bool)).startswith("option(spec='verbose|v', id='verbose'"))


class TestConversion(TestCase):
    """Behavioral tests for convert() and zero()."""

    def testStringPassesThrough(self):
        self.assertEqual(convert("-3", str), "-3")

    def testBooleans(self):
        for token in ("true", "YES", "on", "1"):
            self.assertIs(convert(token, bool), True)
        for token in ("false", "No", "OFF", "0"):
            self.assertIs(convert(token, bool), False)
        with self.assertRaises(ValueError):
            convert("maybe", bool)

    def testNumbers(self):
        self.assertEqual(convert("42", int), 42)
        self.assertEqual(convert("2.5", float), 2.5)
        with self.assertRaises(ValueError):
            convert("forty-two", int)

    def testEnumByNameOrValue(self):
        self.assertIs(convert("RED", Color), Color.RED)
        self.assertIs(convert("g", Color), Color.GREEN)
        with self.assertRaises(ValueError):
            convert("blue", Color)

    def testCallableConverter(self):
        self.assertEqual(convert("a/b", Path), Path("a/b"))

    def testZeroValues(self):
        self.assertEqual(zero(str), "")
        self.assertEqual(zero(int), 0)
        self.assertIs(zero(bool), False)
        self.assertEqual(zero(list[int]), [])
        self.assertEqual(zero(tuple[int, str]), (0, ""))
        self.assertIsNone(zero(Path))


if __name__ == "__main__":
    unittest.main()
