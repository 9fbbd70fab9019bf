"""
Switchboard faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing failure.
- CommandException: base type that carries message + options and knows how to
  render itself (rich) and how to surface itself (raise or print-and-exit).
- ValidationError: the argument-validation branch (missing argument, type mismatch).
- trigger(): central entry point to surface any fault with runtime options.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: argument faults name the ordinal position
  (“at second position”) so users can learn by trying.
- Short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The dispatcher builds faults, merges runtime options through trigger(fault, **ctx).
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via rich
  on stderr and the process exits with status 1.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the dispatcher (stable identifiers).

    grouping
    - routing (1110x): UNKNOWN_COMMAND, FORBIDDEN_OPERATION
    - arguments (1112x): MISSING_ARGUMENT, TYPE_MISMATCH
    - configuration (1113x): REFLECTION_FAILURE

    normalize() lets the host remap codes to its own labels through a
    __codes__ mapping in __main__.
    """
    # --- routing errors ---
    UNKNOWN_COMMAND     = 11101
    FORBIDDEN_OPERATION = 11102

    # --- argument errors ---
    MISSING_ARGUMENT    = 11121
    TYPE_MISMATCH       = 11122

    # --- configuration errors ---
    REFLECTION_FAILURE  = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _option(name, /):
    # structured payload lives in options; expose it as a read-only attribute
    def getter(self):
        return self.options.get(name)

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    code = _option("code")
    title = _option("title")
    hint = _option("hint")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "usage-label": "bold #00E6FF",
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style if colorful else "")

        prog = text(getattr(main, "__prog__", self.options.get("prog") or "switchboard"), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else code, styler("code")),
            " | ",
            text(str(self.options.get("title") or "error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        renders = []
        if usage := self.options.get("usage"):
            renders.append(Text.assemble(text("Usage:", styler("usage-label")), " ", text(usage)))
        renders.append(message)
        if self.options.get("hint"):
            renders.append(hint)

        if fancy:
            width = console.width - 4
            try:
                width = int(width * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(CommandException):
    token = _option("token")
    suggestions = _option("suggestions")


class ForbiddenOperationError(CommandException):
    operation = _option("operation")


class ReflectionFailureError(CommandException):
    provider = _option("provider")
    name = _option("name")


class ValidationError(CommandException):
    position = _option("position")
    operation = _option("operation")


class MissingArgumentError(ValidationError):
    name = _option("name")


class TypeMismatchError(ValidationError):
    expected = _option("expected")
    value = _option("value")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console and the process exits;
      otherwise the merged exception is raised.

    typical options
    - prog, shell, fancy, colorful, usage, title, code, hint, docs, and any
      structured payload (position, name, expected, token, suggestions, ...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode; when absent, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "UnknownCommandError",
    "ForbiddenOperationError",
    "ReflectionFailureError",
    "ValidationError",
    "MissingArgumentError",
    "TypeMismatchError",
    "FaultCode",
    "trigger",
    "getdoc",
)
