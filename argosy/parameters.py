r"""
Argosy parameter specifications.

Overview
- Specs
  • Operand[_T]: positional parameter, consumed by position (single, list or fixed-size arity).
  • Option[_T]: named parameter declared by a name specification ("verbose|v|garrulous+").

- Introspection & representation
  • ParameterType metaclass provides stable __repr__/__rich_repr__ and exposes selected
    fields via read-only properties declared in __introspectable__/__displayable__.

Declaration
- Value types are plain converters (str, int, float, bool, Path, an Enum subclass, ...)
  or standard generics for sequences: list[T] (growable) and tuple[T, T, ...] (fixed).
- A processor replaces the default conversion. For operands, the annotation of the
  processor's only parameter picks the arity (str, list[str], tuple[str, str, ...]);
  for options the processor receives one string per occurrence. When a processor is
  annotated with a return type, that type becomes the parameter's value type.
- Settings (category, desc, help, required) are passed as setting instances; see
  argosy.settings.

Shorthand positionals
- Leading non-setting positionals are read as: a type (class or generic alias) or a
  processor (other callable) first, then a default (options only). A leading
  non-callable is a default:
    >>> Option("verbose|v", bool, False, Desc("talk more"))
    >>> Option("count", 3)
    >>> Operand("files", list[str], Required())

Arity (operands)
- ValueKind.SINGLE consumes exactly one token.
- ValueKind.LIST consumes every remaining token.
- ValueKind.FIXED consumes up to k tokens; Arity.length holds k.

Validation highlights
- Operand names and option long names must derive into valid identifiers (see
  argosy.identifiers); explicit ids must already be valid identifiers.
- Incrementable options must be integer typed and cannot have a processor.
- Options cannot be fixed-size tuples.
- type and processor are mutually exclusive.

Public API
- Classes: Operand, Option, ValueKind, Arity
- Helpers: convert, zero
"""
import builtins
import functools
import inspect
import operator
import re
import typing
from collections import namedtuple
from enum import Enum
from types import GenericAlias

from . import identifiers, names, settings as _settings
from .faults import InvalidIdentifierError
from .utils import *


class ValueKind(Enum):
    """
    how many tokens an operand consumes.
    """
    SINGLE = "single"
    LIST = "list"
    FIXED = "fixed"


class Arity(namedtuple("Arity", ("kind", "length"))):
    """
    arity of a parameter: its ValueKind and, for FIXED, the number of slots.
    """
    __slots__ = ()

    def __repr__(self):
        if self.kind is ValueKind.FIXED:
            return f"fixed({self.length})"
        return self.kind.value


SINGLE = Arity(ValueKind.SINGLE, 1)
LIST = Arity(ValueKind.LIST, None)

_BOOLEANS = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}

# converters whose call without arguments gives a meaningful empty value
_ZEROABLE = (str, int, float, bool, complex, bytes)


@functools.cache
def _shape(type, /):
    """
    split a value type into (arity, container, element converters).

    - list / list[T]          → LIST, list, (T,)   (T defaults to str)
    - tuple[T, ...]           → LIST, tuple, (T,)
    - tuple / tuple[T1, T2]   → FIXED(2), tuple, (T1, T2)
    - anything else           → SINGLE, None, (type,)
    """
    origin = typing.get_origin(type)
    arguments = typing.get_args(type)

    if type is list or origin is list:
        return LIST, list, (arguments[0] if arguments else str,)
    if type is tuple:
        return LIST, tuple, (str,)
    if origin is tuple:
        if len(arguments) == 2 and arguments[1] is Ellipsis:
            return LIST, tuple, (arguments[0],)
        if not arguments or arguments == ((),):
            raise TypeError("fixed-size tuple types must have at least one element")
        return Arity(ValueKind.FIXED, len(arguments)), tuple, arguments
    return SINGLE, None, (type,)


def zero(type, /):
    """
    the value a parameter of 'type' holds before anything is assigned to it.

    - str/int/float/bool/complex/bytes → their empty value ("", 0, 0.0, False, ...)
    - list[T] → [], tuple[T, ...] → ()
    - tuple[T1, ..., Tk] → a k-tuple of the element zero values
    - anything else → None
    """
    if type is Unset or type is None:
        return None
    arity, container, elements = _shape(type)
    match arity.kind:
        case ValueKind.LIST:
            return container()
        case ValueKind.FIXED:
            return tuple(map(zero, elements))
    return type() if type in _ZEROABLE else None


def convert(token, type, /):
    """
    standard string-to-value conversion for one token.

    - str passes through;
    - bool accepts true/false, yes/no, on/off, 1/0 (case-insensitive);
    - bytes are utf-8 encoded;
    - Enum subclasses accept a member name or the string form of a member value;
    - any other type is called with the token.

    raises ValueError (or whatever the converter raises) when the token is not acceptable.
    """
    if type is str or type is Unset:
        return token
    if type is bool:
        try:
            return _BOOLEANS[token.strip().lower()]
        except KeyError:
            raise ValueError(f"{token!r} is not a boolean") from None
    if type is bytes:
        return token.encode()
    if builtins.type(type) is not GenericAlias and isinstance(type, builtins.type) and issubclass(type, Enum):
        try:
            return type[token]
        except KeyError:
            pass
        for member in type:
            if str(member.value) == token:
                return member
        raise ValueError(f"{token!r} is not a valid {type.__name__}")
    return type(token)


def _signature(processor, /):
    """
    best-effort (parameter annotation, return annotation) of a processor.
    """
    try:
        signature = inspect.signature(processor, eval_str=True)
    except (NameError, SyntaxError, TypeError):
        try:
            signature = inspect.signature(processor)
        except (TypeError, ValueError):
            return Unset, Unset
    except ValueError:
        return Unset, Unset

    parameters = list(signature.parameters.values())
    parameter = parameters[0].annotation if parameters else inspect.Parameter.empty
    returns = signature.return_annotation
    return (
        Unset if parameter is inspect.Parameter.empty else parameter,
        Unset if returns is inspect.Signature.empty else returns,
    )


def _infer(default, /):
    """
    value type implied by a declared default; containers take their first element's type.
    """
    if isinstance(default, list) and default:
        return list[builtins.type(default[0])]
    if isinstance(default, tuple) and default:
        return tuple[*map(builtins.type, default)]
    return builtins.type(default)


class ParameterType(type):
    """
    Metaclass that turns specs into introspectable, read-only descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(spec='verbose|v', id='verbose', type=<class 'bool'>, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _split_arguments(cls, arguments, metadata, limit, /):
    """
    Internal: sort shorthand positionals into metadata and settings.

    Leading non-setting positionals fill, in order, 'type' or 'processor' (when
    callable) and then 'default' (when 'limit' allows it). A leading non-callable
    goes straight to 'default'. Setting instances may appear anywhere.
    """
    settings = []
    slots = ["callable", "default"][:limit]
    for argument in arguments:
        if isinstance(argument, _settings.Setting):
            settings.append(argument)
            continue

        if slots[:1] == ["callable"] and (isinstance(argument, type | GenericAlias) or callable(argument)):
            key = "type" if isinstance(argument, type | GenericAlias) else "processor"
            slots.remove("callable")
        elif "default" in slots:
            key = "default"
            slots.clear()
        else:
            raise TypeError(f"{cls.__typename__} got an unexpected positional argument {argument!r}")

        if metadata[key] is not Unset:
            raise TypeError(f"{cls.__typename__} got multiple values for {key!r}")
        metadata[key] = argument

    metadata["settings"] = _settings.resolve(settings)


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the 'type'/'processor' pair and the explicit 'id'.

    Raises
    - TypeError: when both type and processor are given, when the processor is not
      callable, or when the type is neither a class, a generic alias nor a callable.
    - InvalidIdentifierError: when an explicit id is not a valid identifier.
    """
    if metadata["type"] is not Unset and metadata["processor"] is not Unset:
        raise TypeError(f"{cls.__typename__} cannot have both 'type' and 'processor'")
    if metadata["processor"] is not Unset and not callable(metadata["processor"]):
        raise TypeError(f"{cls.__typename__} 'processor' must be callable")
    if metadata["type"] is not Unset and not (isinstance(metadata["type"], GenericAlias) or callable(metadata["type"])):
        raise TypeError(f"{cls.__typename__} 'type' must be a type or a converter")

    if (id := metadata["id"]) is not Unset:
        if not isinstance(id, str):
            raise TypeError(f"{cls.__typename__} 'id' must be a string")
        if not identifiers.isidentifier(id):
            raise InvalidIdentifierError(f"{cls.__typename__} 'id' {id!r} is not a valid identifier", identifier=id)


class Operand[_T](metaclass=ParameterType):
    """
    Positional parameter specification.

    An operand consumes tokens by position once options have been removed from the
    argument vector. Its arity decides how many:
    - SINGLE: exactly one (missing → MissingOperandError);
    - LIST: every remaining token (none is fine unless required);
    - FIXED(k): up to k tokens, unfilled slots keep their zero value.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "name",
        "id",
        "type",
        "processor",
        "arity",
        "default",
        "value",
        "settings",
    )

    __displayable__ = (
        "name",
        "id",
        "type",
        "arity",
        "settings",
    )

    def __new__(cls, name, /, *arguments, type=Unset, processor=Unset, id=Unset):
        """
        Construct an Operand spec.

        Parameters
        - name: str
          Name shown in usage text (<name>); also the source of the derived id.
        - arguments: shorthand type/processor followed by setting instances.
        - type: value type (defaults to str); list[T]/tuple[...] pick the arity.
        - processor: callable replacing the default conversion.
        - id: explicit identifier, bypassing derivation from 'name'.
        """
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")

        metadata = {"type": type, "processor": processor, "default": Unset, "id": id}
        _split_arguments(cls, arguments, metadata, 1)
        _sanitize_metadata(cls, metadata)

        if metadata["processor"] is not Unset:
            parameter, returns = _signature(metadata["processor"])
            arity, container, elements = _shape(coalesce(parameter, str))
            type = returns
        else:
            type = coalesce(metadata["type"], str)
            arity, container, elements = _shape(type)

        self = super().__new__(cls)
        self._name = name
        self._id = metadata["id"] or identifiers.derive(name)
        self._type = type
        self._processor = metadata["processor"]
        self._arity = arity
        self._container = container
        self._elements = elements
        self._settings = metadata["settings"]
        self._default = zero(type)
        self._value = self._default
        return self

    @property
    def category(self):
        return self._settings.category

    @property
    def desc(self):
        return self._settings.desc

    @property
    def help(self):
        return self._settings.help

    @property
    def required(self):
        return self._settings.required

    def convert(self, token, index=0, /):
        """
        convert one token for slot 'index' (only FIXED arity has more than one slot).
        """
        return convert(token, self._elements[min(index, len(self._elements) - 1)])

    def collect(self, values, /):
        """
        wrap converted values into this operand's container (list or tuple).
        """
        if self._arity.kind is ValueKind.FIXED:
            return tuple(values) + self._default[len(values):]
        return self._container(values)


class Option[_T](metaclass=ParameterType):
    """
    Named parameter specification.

    An option is declared with a name specification (see argosy.names) and is
    matched on the command line by --long, -s or --alias, with its value inline
    (--long=value, -svalue) or in the next token (--long value, -s value).

    Highlights
    - bool options and incrementable options are switches: they take no value
      token (an inline value is still accepted, --verbose=false).
    - incrementable options ("verbose|v+") add one per occurrence.
    - list[T] options collect every occurrence, replacing the default.
    - a processor receives each occurrence's raw string; its result overwrites the value.
    - the value type is explicit, or inferred from the processor's return annotation,
      or from the default (list defaults by their first element), and falls back to str
      (int when incrementable). Only operands can be required.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "spec",
        "id",
        "long",
        "short",
        "aliases",
        "incrementable",
        "type",
        "processor",
        "arity",
        "default",
        "value",
        "settings",
    )

    __displayable__ = (
        "spec",
        "id",
        "type",
        "default",
        "settings",
    )

    def __new__(cls, spec, /, *arguments, type=Unset, default=Unset, processor=Unset, id=Unset):
        """
        Construct an Option spec.

        Parameters
        - spec: str
          Name specification, e.g. "verbose|v|garrulous+".
        - arguments: shorthand type/processor and default followed by setting instances.
        - type: value type; list[T] collects every occurrence.
        - default: value held when the option is not given (not validated).
        - processor: callable receiving each occurrence's raw string.
        - id: explicit identifier, bypassing derivation from the long name.
        """
        if not isinstance(spec, str):
            raise TypeError(f"{cls.__typename__} 'spec' must be a string")

        metadata = {"type": type, "processor": processor, "default": default, "id": id}
        _split_arguments(cls, arguments, metadata, 2)
        _sanitize_metadata(cls, metadata)

        names_ = names.parse(spec.strip())

        if metadata["processor"] is not Unset:
            type = _signature(metadata["processor"])[1]
        elif metadata["type"] is not Unset:
            type = metadata["type"]
        elif metadata["default"] is not Unset and metadata["default"] is not None:
            type = _infer(metadata["default"])
        else:
            type = int if names_.incrementable else str

        arity, container, elements = _shape(coalesce(type, str))
        if arity.kind is ValueKind.FIXED:
            raise TypeError(f"{cls.__typename__} 'type' cannot be a fixed-size tuple")

        if metadata["settings"].required:
            raise TypeError(f"{cls.__typename__} cannot be required, only operands can")

        if names_.incrementable:
            if metadata["processor"] is not Unset:
                raise TypeError(f"incrementable {cls.__typename__} cannot have a 'processor'")
            if type is not int:
                raise TypeError(f"incrementable {cls.__typename__} must be integer typed")

        self = super().__new__(cls)
        self._spec = spec.strip()
        self._names = names_
        self._long = names_.long
        self._short = names_.short
        self._aliases = names_.aliases
        self._incrementable = names_.incrementable
        self._id = metadata["id"] or identifiers.derive(names_.long)
        self._type = type
        self._processor = metadata["processor"]
        self._arity = arity
        self._container = container
        self._elements = elements
        self._settings = metadata["settings"]
        self._declared = metadata["default"] is not Unset
        self._default = coalesce(metadata["default"], zero(type))
        self._value = self._default
        return self

    @property
    def names(self):
        """
        the parsed name specification (long, short, aliases, incrementable).
        """
        return self._names

    @property
    def switch(self):
        """
        True when the option takes no value token (bool or incrementable).
        """
        return self._processor is Unset and (self._type is bool or self._incrementable)

    @property
    def declared(self):
        """
        True when the default was given by the caller (shown in help).
        """
        return self._declared

    @property
    def category(self):
        return self._settings.category

    @property
    def desc(self):
        return self._settings.desc

    @property
    def help(self):
        return self._settings.help

    def convert(self, token, /):
        """
        convert one occurrence's token (element-wise for list options).
        """
        return convert(token, self._elements[0])

    def collect(self, values, /):
        """
        wrap converted occurrences into this option's container (list or tuple).
        """
        return self._container(values)


__all__ = (
    # Classes (specifications)
    "Operand",
    "Option",

    # Arity
    "ValueKind",
    "Arity",

    # Conversion helpers
    "convert",
    "zero",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ParameterType
