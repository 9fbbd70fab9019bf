"""
Switchboard utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the inspector, renderer, and dispatcher layers.

Overview
- UnsetType / Unset
  • Singleton sentinel for “value not provided”, distinct from None.
  • A parameter whose default is None still has a default; only Unset means “required”.

- coalesce(value, default=None)
  • Replace Unset with a concrete default while preserving None/0/""/[].

- mirror("attr")
  • Read-only property exposing a private backing field (self._attr); containers are
    handed out as fresh copies.

- ordinal(number)
  • 1-based ordinal wording used by every position-first message (“second position”).

Stability and contract
- Names listed in __all__ are the supported surface; everything else may change.
"""
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are returned as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def _immortalize(object):
    # Fresh containers only; scalars and opaque objects pass through.
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return frozenset(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Sequences come back as tuples and sets as frozensets so callers cannot mutate
    descriptor state through the public API.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    if not isinstance(number, int) or number < 1:
        raise ValueError("ordinal() argument must be a positive integer")
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, ...)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Used wherever None is a legitimate user value, most notably parameter defaults:
a default of None renders as NULL and makes the parameter optional, while Unset
means the parameter has no default at all.
"""


__all__ = (
    # Functions
    "coalesce",
    "mirror",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
