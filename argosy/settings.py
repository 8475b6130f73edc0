"""
Argosy parameter settings.

Every parameter carries the same closed set of optional metadata:

    kind        type    default   meaning
    category    str     ""        heading under which the parameter is grouped
    desc        str     ""        short description shown next to the parameter in help
    help        str     ""        longer explanation shown below the description
    required    bool    False     the operand must receive at least one token (operands only)

Settings are declared by passing setting instances alongside the parameter:

    Operand("files", list[str], Desc("files to process"), Required())

resolve() folds such instances into a Settings record; the last instance of a kind
wins and kinds that were not given keep their defaults. The set of kinds is closed.
"""
from collections import namedtuple
from enum import Enum


class SettingKind(Enum):
    """
    the closed set of setting kinds, each bound to its value type and default.
    """
    CATEGORY = ("category", str, "")
    DESC = ("desc", str, "")
    HELP = ("help", str, "")
    REQUIRED = ("required", bool, False)

    @property
    def id(self):
        return self.value[0]

    @property
    def type(self):
        return self.value[1]

    @property
    def default(self):
        return self.value[2]


class Setting(namedtuple("Setting", ("kind", "value"))):
    """
    one setting instance: a kind and its value.
    """
    __slots__ = ()

    def __new__(cls, kind, value, /):
        if not isinstance(kind, SettingKind):
            raise TypeError("setting 'kind' must be a setting-kind")
        if not isinstance(value, kind.type):
            raise TypeError(f"setting {kind.id!r} must be a {kind.type.__name__}")
        return super().__new__(cls, kind, value)

    def __repr__(self):
        return f"{self.kind.id}({self.value!r})"


Settings = namedtuple("Settings", tuple(kind.id for kind in SettingKind))
Settings.__doc__ = "resolved settings of one parameter (category, desc, help, required)."


def Category(text, /):
    """heading under which the parameter is grouped."""
    return Setting(SettingKind.CATEGORY, text)


def Desc(text, /):
    """short description shown next to the parameter in help."""
    return Setting(SettingKind.DESC, text)


def Help(text, /):
    """longer explanation shown below the description in help."""
    return Setting(SettingKind.HELP, text)


def Required(flag=True, /):
    """mark the parameter as required."""
    return Setting(SettingKind.REQUIRED, flag)


def resolve(settings=(), /):
    """
    fold setting instances into a Settings record.

    - the last instance of a kind wins;
    - kinds without an instance take their declared default;
    - anything that is not a Setting raises TypeError.
    """
    values = {kind: kind.default for kind in SettingKind}
    for setting in settings:
        if not isinstance(setting, Setting):
            raise TypeError(f"settings must be setting instances, not {type(setting).__name__!r}")
        values[setting.kind] = setting.value
    return Settings(*(values[kind] for kind in SettingKind))


__all__ = (
    "SettingKind",
    "Setting",
    "Settings",
    "Category",
    "Desc",
    "Help",
    "Required",
    "resolve",
)
