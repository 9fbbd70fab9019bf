"""
Switchboard usage rendering.

All renderers return rich Text; str(text) (or text.plain) is the unstyled form and
is what the rest of the package reasons about. Styling never changes the plain text.

Shapes
- render_parameter: "<int $a>" when required, "<[int $a = 5]>" with a default,
  "<[$rest ...]>" style for *args ("<[str ...$rest]>" when annotated). A None default
  reads "NULL"; every other default is interpolated as str(value).
- render_usage: rendered parameters joined by one space, with a trailing space; ""
  when there are no parameters.
- render_signature: "alias:name <...> " for one operation (validation failures).
- render_synopsis: the top-level "Usage:" block.
- render_help: "Available commands:" then one line per public operation, per provider
  in registry order. Names are padded to max(10, longest + 2) within each provider.

Palette keys
- usage-label, section-label, command-name, parameter-type, parameter-name,
  parameter-default, description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- colorful=False strips every style.
"""
from collections import defaultdict

from rich.text import Text

from .signatures import firstline
from .utils import *

PAD = 10


def _palette(colorful):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "section-label": "bold #FFFFFF",  # Pure white headers

        # === Commands ===
        "command-name": "bold #22C55E",  # GREEN command names

        # === Parameters ===
        "parameter-type": "#36C5F0",  # SKY-BLUE declared types
        "parameter-name": "bold #00E6FF",  # CYAN $names
        "parameter-default": "#737373",  # Dim gray defaults

        # === Help table ===
        "description": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _default(value):
    return "NULL" if value is None else str(value)


def render_parameter(parameter, /, *, colorful=True):
    """
    Render one parameter descriptor as "<Type $name>" or "<[Type $name = default]>".
    """
    styler = _palette(colorful)

    output = Text()
    if parameter.annotation:
        output.append(parameter.annotation, styler("parameter-type")).append(" ")
    if parameter.variadic:
        output.append("...$" + parameter.name, styler("parameter-name"))
    else:
        output.append("$" + parameter.name, styler("parameter-name"))

    if parameter.default is not Unset:
        output.append(" = " + _default(parameter.default), styler("parameter-default"))

    if parameter.optional:
        output = Text.assemble("[", output, "]")

    return Text.assemble("<", output, ">")


def render_usage(parameters, /, *, colorful=True):
    """
    Join rendered parameters with single spaces, plus a trailing space ("" if none).
    """
    parameters = tuple(parameters)
    if not parameters:
        return Text()
    return Text(" ").join(render_parameter(parameter, colorful=colorful) for parameter in parameters).append(" ")


def render_signature(operation, /, *, colorful=True):
    """
    Render the command line for one operation: qualified name, a space, its usage.
    """
    styler = _palette(colorful)
    return Text.assemble(
        Text(operation.qualname, styler("command-name")),
        " ",
        render_usage(operation.parameters, colorful=colorful),
    )


def render_synopsis(prog=Unset, /, *, colorful=True):
    """
    Render the top-level usage block shown when no command is given.
    """
    styler = _palette(colorful)
    synopsis = Text()
    synopsis.append("Usage:", styler("usage-label")).append("\n ")
    if prog:
        synopsis.append(prog, styler("command-name")).append(" ")
    synopsis.append("command [arguments]", styler("command-name"))
    return synopsis


def render_help(registry, /, *, describer=firstline, colorful=True):
    """
    Render the listing of every public, non-lifecycle operation of every provider.

    Parameters
    - registry: Registry
    - describer: Callable[[callable], str | None]
      Documentation collaborator; its line is appended after the usage when truthy.
    - colorful: bool
    """
    styler = _palette(colorful)

    help = Text()
    help.append("Available commands:", styler("section-label"))

    for provider in registry:
        listed = [operation for operation in provider.operations if operation.dispatchable]
        if not listed:
            continue
        width = max(PAD, max(len(operation.qualname) for operation in listed) + 2)

        for operation in listed:
            help.append("\n ")
            help.append(operation.qualname.ljust(width), styler("command-name"))
            help.append(render_usage(operation.parameters, colorful=colorful))
            if description := describer(operation.callback):
                help.append(str(description), styler("description"))

    return help


__all__ = (
    "render_parameter",
    "render_usage",
    "render_signature",
    "render_synopsis",
    "render_help",
)
