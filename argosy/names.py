"""
Argosy option name specifications.

An option is declared with a single specification string listing all of its names,
separated by bars:

    "verbose|v|garrulous|loquacious"

- the first name is the long name ("verbose", used as --verbose);
- the first one-character name after it is the short name ("v", used as -v);
- every other name longer than one character is an alias (--garrulous, --loquacious);
- further one-character names are ignored (an option has at most one short name);
- a "+" anywhere marks the option as incrementable ("verbose|v+": each occurrence
  adds one instead of overwriting).

parse() is memoized; specifications are parsed once, at declaration time.
"""
import functools
from collections import namedtuple

from .faults import InvalidIdentifierError


class NameSpec(namedtuple("NameSpec", ("long", "short", "aliases", "incrementable"))):
    """
    parsed option names: long name, short name ("" when absent), aliases, incrementable.
    """
    __slots__ = ()

    @property
    def names(self):
        """
        every spelling of the option without dashes, long name first.
        """
        return (self.long, *((self.short,) if self.short else ()), *self.aliases)

    @property
    def flags(self):
        """
        every spelling of the option as typed on a command line.
        """
        return (
            "--" + self.long,
            *(("-" + self.short,) if self.short else ()),
            *("--" + alias for alias in self.aliases),
        )


@functools.cache
def parse(spec, /):
    """
    split a name specification into a NameSpec.

    examples
    - "verbose|v|garrulous|loquacious" → NameSpec("verbose", "v", ("garrulous", "loquacious"), False)
    - "option+"                        → NameSpec("option", "", (), True)
    - "option|o|setting+"              → NameSpec("option", "o", ("setting",), True)

    raises
    - TypeError: when 'spec' is not a string.
    - InvalidIdentifierError: when the long name is empty.
    """
    if not isinstance(spec, str):
        raise TypeError("parse() argument must be a string")

    incrementable = "+" in spec
    long, *others = spec.replace("+", "").split("|")

    if not (long := long.strip()):
        raise InvalidIdentifierError("option %r must have a non-empty long name" % spec, spec=spec)

    short = ""
    aliases = []
    for name in map(str.strip, others):
        if len(name) == 1:
            # only the first one-character name counts
            short = short or name
        elif len(name) > 1 and name != long and name not in aliases:
            aliases.append(name)

    return NameSpec(long, short, tuple(aliases), incrementable)


__all__ = (
    "NameSpec",
    "parse",
)
