"""
Small helpers shared by the argosy modules.

- Unset: the "argument not given" marker. None is a value a caller may pass on purpose
  (an option default, for instance), so omitted keywords default to Unset instead.
  coalesce(value, fallback) turns it back into something concrete.
- rename("name"): decorator fixing the __name__/__qualname__ of functions built at
  class-creation time, so they read well in tracebacks and reprs.
- mirror("name"): read-only property over the private attribute "_name". Lists, sets
  and dicts are handed out as copies, so what a caller does with them never reaches
  the object behind the property.

    >>> coalesce(Unset, 3), coalesce(None, 3)
    (3, None)
"""
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class _UnsetType:
    __slots__ = ()

    def __new__(cls):
        try:
            return Unset
        except NameError:
            return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        raise TypeError("Unset cannot be subclassed")


Unset = _UnsetType()


def coalesce(value, fallback=None, /):
    """
    'value', or 'fallback' when value is Unset. Falsy values (None, 0, "") are kept.
    """
    return fallback if value is Unset else value


def rename(name, /):
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _detach(value):
    # immutable sequences are shared; named tuples keep their type
    if isinstance(value, str | bytes | tuple):
        return value
    if isinstance(value, Mapping):
        return {key: _detach(item) for key, item in value.items()}
    if isinstance(value, Set):
        return {_detach(item) for item in value}
    if isinstance(value, Sequence):
        return [_detach(item) for item in value]
    return value


def mirror(name, /):
    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


__all__ = (
    "Unset",
    "coalesce",
    "rename",
    "mirror",
)
