"""
Argosy parsing engine.

What this module provides
- Parser: validates a parameter set once (identifiers, option names, help option)
  and parses argument vectors against it.
- parse(parameters, args): one-shot convenience around Parser.
- ParseResult: the outcome of one parse (help flag, operand and option records,
  program name) with usage/help helpers.
- Record: read-only mapping from parameter id to value, with attribute access.

Algorithm (two phases, no backtracking)
1. options
   - every parameter value is reset to its default;
   - the help option is scanned first against the whole vector; when it is given the
     parse stops there and every other parameter keeps its default;
   - every other option is scanned in declaration order against what the previous
     scans left (pass-through), converting or processing each occurrence;
   - a last scan with no names faults on any option-like token still present.
2. operands
   - residual tokens: what the option phase left, minus the program name and tokens
     starting with '-' (everything after '--' is kept verbatim);
   - operands consume from the front in declaration order according to their arity.

Quick start
    from argosy import Parser, Operand, Option, Desc

    parser = Parser(
        Operand("file", Desc("input file")),
        Option("verbose|v", bool, False, Desc("talk more")),
    )
    result = parser.parse(["prog", "-v", "input.txt"])
    result.operands.file      # "input.txt"
    result.options.verbose    # True

Faults
- declaration problems raise DeclarationError subclasses (or TypeError) from Parser().
- parse problems go through Parser.trigger(): raised by default, or printed to stderr
  after the usage line followed by sys.exit(1) when the parser runs in shell mode.
"""
import copy
import difflib
import functools
import logging
import os.path
import sys
from collections import deque, namedtuple
from collections.abc import Mapping

from rich.console import Console

from . import helps
from .faults import *
from .parameters import Operand, Option, ValueKind, convert
from .scanner import TERMINATOR, scan
from .settings import Desc
from .utils import *

logger = logging.getLogger(__name__)


def _fields(record, /):
    return object.__getattribute__(record, "_values")


class Record(Mapping):
    """
    read-only mapping from parameter id to parsed value.

    fields are reachable by key (record["file"]) and by attribute (record.file);
    reserved-word ids keep their underscore (record._class).

    on attribute access a field wins over a mapping method of the same name, so an
    operand with id "values" reads as record.values; the shadowed method stays
    reachable through the class (Mapping.items(record)).
    """
    __slots__ = ("_values",)

    def __init__(self, values=(), /):
        object.__setattr__(self, "_values", dict(values))

    def __getattribute__(self, name):
        fields = _fields(self)
        if name in fields:
            return fields[name]
        return object.__getattribute__(self, name)

    def __getitem__(self, key):
        return _fields(self)[key]

    def __iter__(self):
        return iter(_fields(self))

    def __len__(self):
        return len(_fields(self))

    def __contains__(self, key):
        return key in _fields(self)

    def __eq__(self, other):
        if isinstance(other, Record):
            return _fields(self) == _fields(other)
        if isinstance(other, Mapping):
            return _fields(self) == dict(Mapping.items(other))
        return NotImplemented

    __hash__ = None

    def __getattr__(self, name):
        raise AttributeError(f"record has no field {name!r}")

    def __setattr__(self, name, value):
        raise AttributeError("record is read-only")

    def __delattr__(self, name):
        raise AttributeError("record is read-only")

    def __repr__(self):
        return "record(%s)" % ", ".join("%s=%r" % item for item in _fields(self).items())

    def __rich_repr__(self):
        yield from _fields(self).items()


class ParseResult(namedtuple("ParseResult", ("help_wanted", "operands", "options", "program", "parameters"))):
    """
    outcome of one parse.

    fields
    - help_wanted: bool, the help option was given
    - operands: Record keyed by operand id
    - options: Record keyed by option id (the help option included)
    - program: program name used in usage text
    - parameters: the parameter set that produced this result
    """
    __slots__ = ()

    def usage(self):
        return helps.usage(self.parameters, self.program)

    def help(self):
        return helps.help(self.parameters)

    def print_usage(self, *, colorful=False, stderr=False):
        helps.print_usage(self.parameters, self.program, colorful=colorful, stderr=stderr)

    def print_help(self, *, colorful=False, fancy=False, stderr=False):
        helps.print_help(self.parameters, self.program, colorful=colorful, fancy=fancy, stderr=stderr)


def _ishelp(option):
    return option.long == "help" and option.short == "h"


class Parser:
    """
    a validated parameter set, ready to parse argument vectors.

    parameters
    - parameters: Operand | Option
      declaration order matters: operands consume in this order, options are scanned
      in this order (after the help option).
    - program: str
      program name for usage text and faults; defaults to the basename of args[0].
    - strict: bool
      fault on residual tokens no operand consumed (UnexpectedOperandError).
    - shell: bool
      print faults (after the usage line) to stderr and exit with status 1 instead of raising.
    - fancy: bool
      wrap faults and help in panels.
    - colorful: bool
      use the color palette for faults and help.

    raises
    - TypeError: a parameter is neither an Operand nor an Option, or the declared
      help option is not a bool switch.
    - DuplicateIdentifierError: two parameters share an id, or two options share a
      spelling (--long, -s or --alias).
    """

    parameters = mirror("parameters")
    strict = mirror("strict")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, *parameters, program=Unset, strict=False, shell=Unset, fancy=Unset, colorful=Unset):
        for parameter in parameters:
            if not isinstance(parameter, Operand | Option):
                raise TypeError("parser parameters must be operands or options, not %r" % type(parameter).__name__)
        if program is not Unset and not isinstance(program, str):
            raise TypeError("parser 'program' must be a string")

        helper = next((x for x in parameters if isinstance(x, Option) and _ishelp(x)), None)
        if helper is None:
            helper = Option("help|h", bool, Desc("Print this help"))
            logger.debug("no help option declared; injecting %r", helper)
        elif helper.type is not bool or not helper.switch:
            raise TypeError("help option %r must be a bool switch" % helper.spec)

        parameters = (helper, *(x for x in parameters if x is not helper))

        ids = {}
        for parameter in parameters:
            if (other := ids.setdefault(parameter.id, parameter)) is not parameter:
                raise DuplicateIdentifierError(
                    "%s %r and %s %r share the identifier %r" % (
                        type(other).__typename__, getattr(other, "spec", getattr(other, "name", "")),
                        type(parameter).__typename__, getattr(parameter, "spec", getattr(parameter, "name", "")),
                        parameter.id,
                    ),
                    id=parameter.id,
                    parameters=(other, parameter),
                )

        flags = {}
        for option in (x for x in parameters if isinstance(x, Option)):
            for flag in option.names.flags:
                if (other := flags.setdefault(flag, option)) is not option:
                    raise DuplicateIdentifierError(
                        "options %r and %r both claim %r" % (other.spec, option.spec, flag),
                        flag=flag,
                        parameters=(other, option),
                    )

        self._parameters = parameters
        self._helper = helper
        self._flags = flags
        self._program = program
        self._invoked = ""
        self._strict = bool(strict)
        self._shell = bool(coalesce(shell, False))
        self._fancy = bool(coalesce(fancy, False))
        self._colorful = bool(coalesce(colorful, False))

    @property
    def program(self):
        """
        the declared program name, or the basename of the last parsed args[0].
        """
        return coalesce(self._program, self._invoked)

    @property
    def operands(self):
        return tuple(x for x in self._parameters if isinstance(x, Operand))

    @property
    def options(self):
        """
        options in scanning order (help option first).
        """
        return tuple(x for x in self._parameters if isinstance(x, Option))

    def usage(self):
        return helps.usage(self._parameters, self.program)

    def help(self):
        return helps.help(self._parameters)

    def print_usage(self, *, stderr=False):
        helps.print_usage(self._parameters, self.program, colorful=self._colorful, stderr=stderr)

    def print_help(self, *, stderr=False):
        helps.print_help(self._parameters, self.program, colorful=self._colorful, fancy=self._fancy, stderr=stderr)

    def trigger(self, fault, /, **options):
        """
        surface a fault with this parser's presentation settings.

        in shell mode errors are preceded by the usage line on stderr.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        fault = copy.replace(fault, **options, tool=self, shell=self._shell, fancy=self._fancy, colorful=self._colorful)
        if self._shell and isinstance(fault, ParseError):
            Console(stderr=True).print(helps.render_usage(self._parameters, self.program, colorful=self._colorful))
        trigger(fault)

    def _invalid(self, parameter, token, exception):
        self.trigger(InvalidArgumentError(
            "invalid value %r for %s %r" % (token, type(parameter).__typename__, parameter.id),
            title="invalid argument",
            code=FaultCode.INVALID_ARGUMENT,
            id=parameter.id,
            token=token,
            exception=exception,
            hint=str(exception) or "check the expected type of %r" % parameter.id,
            docs=getdoc(FaultCode.INVALID_ARGUMENT)
        ))

    def _call(self, parameter, function, token, /, *arguments):
        """
        run a conversion or processor, turning its failure into InvalidArgumentError.
        """
        try:
            return function(token, *arguments)
        except Exception as exception:
            self._invalid(parameter, token, exception)

    def _assign(self, option, values):
        """
        fold the occurrences found by the scanner into the option's new value.
        """
        if option.processor is not Unset:
            value = option.value
            for token in values:
                value = self._call(option, option.processor, token)
            return value

        if option.incrementable:
            value = option.value
            for token in values:
                value = value + 1 if token is None else self._call(option, convert, token, int)
            return value

        if option.switch:
            # last occurrence wins; --name=false turns a switch back off
            token = values[-1]
            return True if token is None else self._call(option, convert, token, bool)

        converted = [self._call(option, option.convert, token) for token in values]
        if option.arity.kind is ValueKind.LIST:
            return option.collect(converted)
        return converted[-1]

    def _consume(self, operand, tokens):
        """
        take the tokens 'operand' is owed from the front of 'tokens' and produce its value.
        """
        match operand.arity.kind:
            case ValueKind.SINGLE:
                if not tokens:
                    return self._missing(operand)
                token = tokens.popleft()
                if operand.processor is not Unset:
                    return self._call(operand, operand.processor, token)
                return self._call(operand, operand.convert, token)

            case ValueKind.LIST:
                taken = list(tokens)
                tokens.clear()
                if not taken and operand.required:
                    return self._missing(operand)
                if operand.processor is not Unset:
                    return self._call(operand, operand.processor, taken)
                return operand.collect(self._call(operand, operand.convert, token) for token in taken)

            case ValueKind.FIXED:
                length = operand.arity.length
                taken = [tokens.popleft() for _ in range(min(length, len(tokens)))]
                if not taken and operand.required:
                    return self._missing(operand)
                if operand.processor is not Unset:
                    return self._call(operand, operand.processor, tuple(taken) + ("",) * (length - len(taken)))
                return operand.collect([self._call(operand, operand.convert, token, index) for index, token in enumerate(taken)])

    def _missing(self, operand):
        self.trigger(MissingOperandError(
            "missing operand <%s>" % operand.name,
            title="missing operand",
            code=FaultCode.MISSING_OPERAND,
            id=operand.id,
            name=operand.name,
            hint="provide a value for <%s> (usage: %s)" % (operand.name, self.usage()),
            docs=getdoc(FaultCode.MISSING_OPERAND)
        ))

    def _sweep(self, remaining):
        """
        fault on any option-like token the declared options did not claim.
        """
        try:
            scan(remaining, None, passthrough=False)
        except UnrecognizedOptionError as error:
            input = error.options["token"].partition("=")[0]
            suggestions = difflib.get_close_matches(input, self._flags.keys(), 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], self.program)
            except IndexError:
                hint = "try '%s --help' to see all available options" % self.program
            self.trigger(error, suggestions=suggestions, hint=hint)

    def _result(self, wanted):
        return ParseResult(
            wanted,
            Record((x.id, x.value) for x in self.operands),
            Record((x.id, x.value) for x in self.options),
            self.program,
            self._parameters,
        )

    def parse(self, args=Unset, /):
        """
        parse an argument vector (sys.argv by default; element 0 is the program name).

        returns
        - ParseResult

        faults (raised unless in shell mode)
        - UnrecognizedOptionError, OptionValueRequiredError, InvalidArgumentError,
          MissingOperandError, UnexpectedOperandError
        """
        args = list(coalesce(args, sys.argv))
        for arg in args:
            if not isinstance(arg, str):
                raise TypeError("parse() arguments must be strings, not %r" % type(arg).__name__)

        self._invoked = os.path.basename(args[0]) if args else ""
        for parameter in self._parameters:
            parameter._value = copy.copy(parameter._default)

        logger.debug("parsing %r with %d parameter(s)", args, len(self._parameters))

        values, remaining = scan(args, self._helper.names, switch=True, trigger=self.trigger)
        if values:
            self._helper._value = self._assign(self._helper, values)
        if self._helper.value:
            logger.debug("help requested; skipping options and operands")
            return self._result(True)

        for option in self.options[1:]:
            values, remaining = scan(
                remaining,
                option.names,
                switch=option.switch,
                trigger=functools.partial(self.trigger, id=option.id),
            )
            if values:
                option._value = self._assign(option, values)
                logger.debug("option %s set to %r", option.id, option.value)

        self._sweep(remaining)

        tokens = remaining[1:]
        if TERMINATOR in tokens:
            index = tokens.index(TERMINATOR)
            tokens = [x for x in tokens[:index] if not x.startswith("-")] + tokens[index + 1:]
        else:
            tokens = [x for x in tokens if not x.startswith("-")]
        tokens = deque(tokens)

        for operand in self.operands:
            operand._value = self._consume(operand, tokens)
            logger.debug("operand %s set to %r", operand.id, operand.value)

        if tokens and self._strict:
            self.trigger(UnexpectedOperandError(
                "unexpected operand(s) %s" % ", ".join(map(repr, tokens)),
                title="unexpected operand",
                code=FaultCode.UNEXPECTED_OPERAND,
                tokens=tuple(tokens),
                hint="remove them (usage: %s)" % self.usage(),
                docs=getdoc(FaultCode.UNEXPECTED_OPERAND)
            ))

        return self._result(False)


def parse(parameters, args=Unset, /, **options):
    """
    declare 'parameters' and parse 'args' in one call (see Parser for options).
    """
    return Parser(*parameters, **options).parse(args)


__all__ = (
    "Record",
    "ParseResult",
    "Parser",
    "parse",
)
