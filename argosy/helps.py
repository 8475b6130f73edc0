"""
Argosy usage and help generation.

Two layers
- Plain text (usage(), help()): pure functions from a parameter set to strings. The
  content is fixed and easy to assert on:

      usage: prog <file> [options]

      options:
          -h, --help    Print this help
          -v, --verbose    talk more (default: False)
              prints every step as it happens

  the indented last line is the option's help setting.

- Rich rendering (render(), print_usage(), print_help()): the same content laid out
  for terminals, with the package palette (overridable through __styles__ in
  __main__), operands listed with their descriptions and options grouped by category.

Options are always listed sorted by long name; the default is shown only when the
option declared one.
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .parameters import Operand, Option


def _operands(parameters):
    return [parameter for parameter in parameters if isinstance(parameter, Operand)]


def _options(parameters):
    return sorted((parameter for parameter in parameters if isinstance(parameter, Option)), key=lambda x: x.long)


def _names(option):
    return ("-%s, " % option.short if option.short else "") + "--" + option.long


def _default(option):
    return " (default: %s)" % (option.default,) if option.declared else ""


def usage(parameters, program="", /):
    """
    the usage line: program name, every operand as <name> in declaration order, then [options].
    """
    return " ".join(filter(None, (
        "usage:",
        program,
        *("<%s>" % operand.name for operand in _operands(parameters)),
        "[options]",
    )))


def help(parameters, /):
    """
    the options listing: one line per option sorted by long name, help setting below it.
    """
    lines = ["options:"]
    for option in _options(parameters):
        line = "    " + _names(option)
        if option.desc:
            line += "    " + option.desc
        lines.append(line + _default(option))
        if option.help:
            lines.append(" " * 8 + option.help)
    return "\n".join(lines)


def _palette():
    return defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "metavar": "bold #FFD600",  # AMBER for operands
        "group-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",  # CYAN for options
        "argument-description": "#9CA3AF",  # Muted gray
        "argument-help": "italic #737373",  # Dim gray long help
        "default": "#22C55E",  # GREEN defaults
        "panel-title": "bold #FF4D94",  # Magenta branding
    } | getattr(__import__("__main__"), "__styles__", {}))


def render(parameters, program="", /, *, colorful=False, fancy=False):
    """
    build the rich renderable for the full help screen.

    sections
    - usage line
    - operands (only those with a description or help text)
    - options, grouped by category ("options" for uncategorized ones), each group
      sorted by long name
    """
    styles = _palette()

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), style)

    renders = [render_usage(parameters, program, colorful=colorful).append("\n")]

    described = [operand for operand in _operands(parameters) if operand.desc or operand.help]
    if described:
        section = Text()
        section.append(text("operands", styler("group-label"))).append(":\n")
        for operand in described:
            section.append("    ").append(text("<%s>" % operand.name, styler("metavar")))
            if operand.desc:
                section.append("    ").append(text(operand.desc, styler("argument-description")))
            section.append("\n")
            if operand.help:
                section.append(" " * 8).append(text(operand.help, styler("argument-help"))).append("\n")
        renders.append(section)

    # uncategorized options come first
    groups = defaultdict(list, {"options": []})
    for option in _options(parameters):
        groups[option.category or "options"].append(option)

    for group, options in filter(lambda x: x[1], groups.items()):
        section = Text()
        section.append(text(group, styler("group-label"))).append(":\n")
        for option in options:
            section.append("    ").append(text(_names(option), styler("option-name")))
            if option.desc:
                section.append("    ").append(text(option.desc, styler("argument-description")))
            section.append(text(_default(option), styler("default")))
            section.append("\n")
            if option.help:
                section.append(" " * 8).append(text(option.help, styler("argument-help"))).append("\n")
        renders.append(section)

    renders[-1].rstrip()
    renderable = Group(*renders)

    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{program} HELP".strip().upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    return renderable


def render_usage(parameters, program="", /, *, colorful=False):
    """
    build the rich Text of the usage line.
    """
    styles = _palette()
    line = Text()
    line.append("usage", styles["usage-label"] if colorful else "").append(":")
    if program:
        line.append(" ").append(program, styles["program-name"] if colorful else "")
    for operand in _operands(parameters):
        line.append(" ").append("<%s>" % operand.name, styles["metavar"] if colorful else "")
    line.append(" [options]")
    return line


def print_usage(parameters, program="", /, *, colorful=False, stderr=False):
    Console(stderr=stderr).print(render_usage(parameters, program, colorful=colorful))


def print_help(parameters, program="", /, *, colorful=False, fancy=False, stderr=False):
    Console(stderr=stderr).print(render(parameters, program, colorful=colorful, fancy=fancy))


__all__ = (
    "usage",
    "help",
    "render",
    "render_usage",
    "print_usage",
    "print_help",
)
