"""
Argosy identifier derivation.

Turns the human-readable (kebab-case) name of a parameter into the identifier under
which its value is published in parse results.

Rules
- "name" stays "name"; "long-option-name" becomes "longOptionName" (every segment
  after the first gets its first character upper-cased, the rest is kept verbatim).
- Reserved words are prefixed with an underscore: "class" → "_class",
  "version" → "_version".
- The result must start with "_" or a letter and continue with "_", letters or digits
  (unicode letters and digits are accepted); otherwise InvalidIdentifierError is raised.

Derivation is pure and memoized; it runs while parameters are declared, so bad names
fail before any argument vector is parsed.
"""
import functools
import keyword

from .faults import InvalidIdentifierError

RESERVED = frozenset(keyword.kwlist) | frozenset(keyword.softkwlist) | {"version"}


def iskeyword(name, /):
    """
    tell whether 'name' is reserved and would be prefixed with an underscore.
    """
    return name in RESERVED


def isidentifier(name, /):
    """
    tell whether 'name' is a well-formed identifier (reserved words included).
    """
    if not isinstance(name, str) or not name:
        return False
    if name[0] != "_" and not name[0].isalpha():
        return False
    return all(char == "_" or char.isalnum() for char in name[1:])


@functools.cache
def derive(name, /):
    """
    derive the identifier for a parameter called 'name'.

    raises
    - TypeError: when 'name' is not a string.
    - InvalidIdentifierError: when the camel-cased result is not a valid identifier.
    """
    if not isinstance(name, str):
        raise TypeError("derive() argument must be a string")

    head, *tail = name.split("-")
    identifier = head + "".join(segment[:1].upper() + segment[1:] for segment in tail)

    if not identifier:
        raise InvalidIdentifierError(
            "parameter name %r cannot form an identifier" % name, name=name, identifier=identifier
        )
    if identifier[0] != "_" and not identifier[0].isalpha():
        raise InvalidIdentifierError(
            "identifier %r derived from %r must begin with an underscore or a letter" % (identifier, name),
            name=name,
            identifier=identifier,
        )
    if not isidentifier(identifier):
        raise InvalidIdentifierError(
            "identifier %r derived from %r may only contain underscores, letters and digits" % (identifier, name),
            name=name,
            identifier=identifier,
        )

    return "_" + identifier if iskeyword(identifier) else identifier


__all__ = (
    "RESERVED",
    "iskeyword",
    "isidentifier",
    "derive",
)
