"""
Argosy option scanner.

A getopt-like primitive that looks for the spellings of ONE option in an argument
vector and hands back what it found plus everything it did not touch:

    >>> scan(["prog", "-v", "--name", "ann", "in.txt"], names.parse("name|n"))
    (['ann'], ['prog', '-v', 'in.txt'])

Recognized forms (for a NameSpec with long "name", short "n", alias "title")
- --name value, --name=value, --title value, --title=value
- -n value, -nvalue, -n=value
- for switches (no value token): --name, -n, -nnn (three occurrences) and the
  inline forms --name=value / -n=value

Rules
- args[0] is the program name and is never scanned.
- "--" ends option scanning; it and every token after it are returned untouched.
- a value-taking option consumes the next token whatever it looks like (so negative
  numbers work: --offset -3); at the end of the vector it raises OptionValueRequiredError.
- with passthrough=False, any other option-like token raises UnrecognizedOptionError.

Faults are surfaced through the 'trigger' callable (argosy.faults.trigger by default)
so a parser can route them through its own presentation settings.
"""
import logging

from .faults import *

logger = logging.getLogger(__name__)

TERMINATOR = "--"


def isoption(token, /):
    """
    tell whether 'token' looks like an option ("-x", "--name"); "-" and "--" do not.
    """
    return isinstance(token, str) and len(token) > 1 and token.startswith("-") and token != TERMINATOR


def _match(token, names, switch, /):
    """
    Internal: match one token against the option's spellings.

    returns (flag, inline value or None, occurrences) or None when it does not match.
    """
    if token.startswith("--"):
        name, equal, value = token[2:].partition("=")
        if name == names.long or name in names.aliases:
            return "--" + name, value if equal else None, 1
        return None

    if not names.short or token[1:2] != names.short:
        return None

    flag, tail = token[:2], token[2:]
    if tail.startswith("="):
        return flag, tail[1:], 1
    if not tail:
        return flag, None, 1
    if switch:
        # -vvv repeats the switch; any other tail belongs to some other option
        return (flag, None, len(tail) + 1) if tail == names.short * len(tail) else None
    return flag, tail, 1


def scan(args, names=None, /, *, switch=False, passthrough=True, trigger=trigger):
    """
    scan 'args' for the option described by 'names'.

    parameters
    - args: sequence of str
      argument vector; element 0 is the program name.
    - names: NameSpec | None
      the option's spellings; None matches nothing (useful with passthrough=False
      to detect leftover options).
    - switch: bool
      the option takes no value token.
    - passthrough: bool
      leave unrecognized option-like tokens in place (True) or fault on them (False).
    - trigger: callable
      fault sink receiving OptionValueRequiredError, UnrecognizedOptionError and
      EmptyOptionValueWarning.

    returns
    - (values, remaining): one entry per occurrence (None for a switch occurrence
      without inline value) and the untouched tokens, program name first.
    """
    args = list(args)
    if not args:
        return [], []

    values = []
    remaining = args[:1]
    tokens = args[1:]
    index = 0

    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token == TERMINATOR:
            remaining.extend(tokens[index - 1:])
            break

        match = _match(token, names, switch) if names is not None and isoption(token) else None

        if match is None:
            if not passthrough and isoption(token):
                trigger(UnrecognizedOptionError(
                    "unrecognized option %r" % token,
                    title="unrecognized option",
                    code=FaultCode.UNRECOGNIZED_OPTION,
                    hint="remove it or put it after '--' to use it as an operand",
                    token=token,
                    docs=getdoc(FaultCode.UNRECOGNIZED_OPTION)
                ))
            remaining.append(token)
            continue

        flag, value, occurrences = match

        if value is not None:
            if not value and not switch:
                trigger(EmptyOptionValueWarning(
                    "empty inline value for option %r" % flag,
                    title="empty inline value",
                    code=FaultCode.EMPTY_INLINE_VALUE,
                    token=token,
                    hint="add a value after '=' (for example: %s=<value>)" % flag,
                    docs=getdoc(FaultCode.EMPTY_INLINE_VALUE)
                ))
            values.append(value)
        elif switch:
            values.extend([None] * occurrences)
        elif index < len(tokens):
            values.append(tokens[index])
            index += 1
        else:
            trigger(OptionValueRequiredError(
                "option %r requires a value" % flag,
                title="missing option value",
                code=FaultCode.OPTION_VALUE_REQUIRED,
                id=names.long,
                token=token,
                hint="provide a value (e.g., %s=value)" % flag,
                docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED)
            ))
            continue

        logger.debug("matched %s in %r (%d occurrence(s))", flag, token, occurrences)

    return values, remaining


__all__ = (
    "TERMINATOR",
    "isoption",
    "scan",
)
