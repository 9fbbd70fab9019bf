"""
Switchboard signature layer: describe provider operations as static descriptors.

What this module provides
- Parameter: one positional argument of an operation (name, annotation, kind, default).
- Operation: a provider/operation-name pair with visibility, scope, parameters and a
  bind() factory that yields a ready-to-call function.
- describe(provider, name): inspect a single operation (None when it does not exist).
- operations(provider): every dispatchable candidate of a provider, in declaration order.

Core ideas
- Introspection happens once, when a registry is built. Resolution, validation and
  rendering only read the descriptors produced here.
- Only two primitive kinds are validated: "int" and "float". Any other annotation
  is kept as display text and treated as untyped.
- Implicit receivers (self/cls), optional keyword-only and **kwargs parameters are not part of
  the command surface; *args becomes an optional, variadic parameter. A required
  keyword-only parameter cannot be supplied from the command line and fails reflection.

Visibility rules
- public: the name does not start with "_".
- lifecycle: the name starts with "__" (construction/destruction hooks, dunders);
  lifecycle operations are never listed by operations().
"""
import functools
import inspect
import logging
import operator
import re
from inspect import Parameter as _Parameter

from .faults import FaultCode, ReflectionFailureError, getdoc
from .utils import *

logger = logging.getLogger(__name__)

# Reserved double prefix for lifecycle (magic) operations.
LIFECYCLE_PREFIX = "__"

# Annotation texts that select a validated kind.
KINDS = frozenset({"int", "float"})


class DescriptorType(type):
    """
    Metaclass for read-only descriptor records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property that
      mirrors the private "_{name}" field (see mirror()). Properties written in the
      class body win over the generated mirror (used for opaque values).
    - Provide stable __repr__/__rich_repr__ for diagnostics and rich pretty printing.
    - Derive __typename__ from the class name ("Operation" -> "operation").
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            } | namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            },
        )

        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _annotation(annotation):
    """
    Normalize an annotation into display text, or None when absent.

    Postponed (string) annotations are taken verbatim; they are never evaluated.
    """
    if annotation is _Parameter.empty:
        return None
    if isinstance(annotation, str):
        return annotation.strip() or None
    if isinstance(annotation, type):
        return annotation.__qualname__
    return re.sub(r"\btyping\.", "", str(annotation))


class Parameter(metaclass=DescriptorType):
    """
    Static metadata about one positional operation argument.

    Fields
    - name: str
    - annotation: str | None, display text of the declared type (rendered in usage).
    - kind: "int" | "float" | None, the validated primitive kind.
    - default: the default value, or Unset when the parameter is required.
    - variadic: bool, True for a *args collector (always optional).
    """
    __introspectable__ = (
        "name",
        "annotation",
        "kind",
        "default",
        "variadic",
    )

    def __init__(self, name, /, annotation=None, default=Unset, *, variadic=False):
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError(f"{type(self).__typename__} 'name' must be an identifier")
        if annotation is not None and not isinstance(annotation, str):
            raise TypeError(f"{type(self).__typename__} 'annotation' must be a string")
        if variadic and default is not Unset:
            raise TypeError(f"{type(self).__typename__} variadic parameter cannot have a default")
        self._name = name
        self._annotation = annotation
        self._kind = annotation if annotation in KINDS else None
        self._default = default
        self._variadic = bool(variadic)

    @property
    def default(self):
        return self._default

    @property
    def optional(self):
        """
        True when the raw argument may be omitted (a default exists, or *args).
        """
        return self._default is not Unset or self._variadic

    @classmethod
    def from_signature(cls, parameter, /):
        """
        Build a descriptor from an inspect.Parameter (positional kinds only).
        """
        return cls(
            parameter.name,
            _annotation(parameter.annotation),
            Unset if parameter.default is _Parameter.empty else parameter.default,
            variadic=parameter.kind is _Parameter.VAR_POSITIONAL,
        )


class Operation(metaclass=DescriptorType):
    """
    Resolved identity of the provider + operation pair backing a command.

    Fields
    - provider: the provider source (class or instance) declaring the operation.
    - name: bare operation name (never alias-qualified).
    - alias: str | None, the provider alias the operation was registered under.
    - separator: str, the alias separator used for qualname.
    - parameters: tuple[Parameter, ...] in declaration order.
    - public / lifecycle / static: visibility and scope flags.
    - callback: the underlying function (handed to documentation collaborators).
    """
    __introspectable__ = (
        "provider",
        "name",
        "alias",
        "separator",
        "parameters",
        "public",
        "lifecycle",
        "static",
    )

    def __init__(self, provider, name, /, callback, parameters=(), *, alias=None, separator=":", static=False):
        self._provider = provider
        self._name = name
        self._callback = callback
        self._parameters = tuple(parameters)
        self._alias = alias
        self._separator = separator
        self._public = not name.startswith("_")
        self._lifecycle = name.startswith(LIFECYCLE_PREFIX)
        self._static = bool(static)

    @property
    def provider(self):
        return self._provider

    @property
    def callback(self):
        return self._callback

    @property
    def qualname(self):
        """
        Command name as typed by users: "alias:name" when aliased, else "name".
        """
        if self._alias is None:
            return self._name
        return self._alias + self._separator + self._name

    @property
    def dispatchable(self):
        return self._public and not self._lifecycle

    def bind(self):
        """
        Return a ready-to-call function for this operation.

        Provider-level operations (static/class methods) and instance providers are
        used as-is; instance-scoped operations on a class provider first construct a
        fresh provider instance, owned by the caller of bind().
        """
        source = self._provider
        if isinstance(source, type) and not self._static:
            logger.debug("instantiating provider %s for %r", source.__qualname__, self._name)
            source = source()
        return getattr(source, self._name)


def _members(provider):
    """
    Yield (name, raw attribute) for callable members in declaration order.

    The class's own namespace comes first, then its bases following the MRO;
    names are reported once (the most derived definition wins). object is skipped.
    """
    seen = set()
    klass = provider if isinstance(provider, type) else type(provider)
    for base in klass.__mro__:
        if base is object:
            continue
        for name, attribute in vars(base).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(attribute, staticmethod | classmethod) or inspect.isroutine(attribute):
                yield name, attribute


def _build(provider, name, attribute, *, alias=None, separator=":"):
    static = isinstance(attribute, staticmethod | classmethod)
    callback = attribute.__func__ if static else attribute

    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError) as exception:
        label = getattr(provider, "__qualname__", type(provider).__qualname__)
        raise ReflectionFailureError(
            "could not inspect operation %r of provider %r" % (name, label),
            title="reflection failure",
            code=FaultCode.REFLECTION_FAILURE,
            provider=provider,
            name=name,
            hint="operations must be plain python functions with an inspectable signature",
            docs=getdoc(FaultCode.REFLECTION_FAILURE),
        ) from exception

    parameters = list(signature.parameters.values())
    # self (instance methods) and cls (classmethods) are supplied by binding
    if not isinstance(attribute, staticmethod) and parameters and parameters[0].kind in (
        _Parameter.POSITIONAL_ONLY, _Parameter.POSITIONAL_OR_KEYWORD
    ):
        del parameters[0]

    # positional tokens can never fill a required keyword-only parameter
    for parameter in parameters:
        if parameter.kind == _Parameter.KEYWORD_ONLY and parameter.default is _Parameter.empty:
            label = getattr(provider, "__qualname__", type(provider).__qualname__)
            raise ReflectionFailureError(
                "operation %r of provider %r has a required keyword-only parameter %r" % (
                    name, label, parameter.name
                ),
                title="reflection failure",
                code=FaultCode.REFLECTION_FAILURE,
                provider=provider,
                name=name,
                hint="give $%s a default value or make it positional" % parameter.name,
                docs=getdoc(FaultCode.REFLECTION_FAILURE),
            )

    return Operation(
        provider,
        name,
        callback,
        (
            Parameter.from_signature(parameter) for parameter in parameters
            if parameter.kind in (
                _Parameter.POSITIONAL_ONLY, _Parameter.POSITIONAL_OR_KEYWORD, _Parameter.VAR_POSITIONAL
            )
        ),
        alias=alias,
        separator=separator,
        static=static,
    )


def describe(provider, name, /, *, alias=None, separator=":"):
    """
    Describe one operation of a provider.

    Returns
    - Operation for an existing callable member (lifecycle and non-public ones included,
      flagged accordingly).
    - None when the provider declares no such operation.

    Raises
    - ReflectionFailureError when the member exists but cannot be introspected.
    """
    if not isinstance(name, str):
        raise TypeError("describe() operation name must be a string")
    for member, attribute in _members(provider):
        if member == name:
            return _build(provider, name, attribute, alias=alias, separator=separator)
    return None


def operations(provider, /, *, alias=None, separator=":"):
    """
    Describe every non-lifecycle operation of a provider, in declaration order.
    """
    return tuple(
        _build(provider, name, attribute, alias=alias, separator=separator)
        for name, attribute in _members(provider)
        if not name.startswith(LIFECYCLE_PREFIX)
    )


def firstline(callback, /):
    """
    Default documentation collaborator: the first non-blank docstring line, or None.
    """
    for line in (inspect.getdoc(callback) or "").splitlines():
        if line := line.strip():
            return line
    return None


__all__ = (
    "Parameter",
    "Operation",
    "describe",
    "operations",
    "firstline",
    "LIFECYCLE_PREFIX",
)

