"""
Switchboard dispatcher: turn provider operations into subcommands and run one.

What this module provides
- Dispatcher: holds a read-only Registry plus runtime flags and runs the
  resolve → validate → invoke pipeline for one command line.
- dispatch(providers, argv): one-shot entry point for scripts (shell mode on).
- invoke(object, prompt): convenience runner for dispatchers, registries, or bare providers.

Quick start
    from switchboard import dispatch

    class Math:
        def add(self, a: int, b: int):
            '''Add two integers.'''
            print(int(a) + int(b))

    if __name__ == "__main__":
        dispatch({0: Math, "m": Math})   # `prog add 3 4` or `prog m:add 3 4`

Flow (one command per process)
- no command        → synopsis + help on stdout, success.
- unknown command   → UnknownCommandError (with suggestions); in shell mode the
                      help listing follows the fault on stderr.
- non-public operation → ForbiddenOperationError (lifecycle operations are unknown).
- validation fails  → "Usage: <command line>" + MissingArgumentError/TypeMismatchError.
- otherwise         → bind the operation (lazily constructing the provider for
                      instance operations) and call it with the raw string tokens.

Runtime flags
- shell: render faults on stderr and exit(1) instead of raising them.
- fancy: draw help and faults inside rich panels.
- colorful: apply the palette (see switchboard.usage / __styles__ in __main__).
"""
import logging
import os.path
import shlex
import sys
from collections.abc import Iterable, Mapping

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .faults import *
from .registry import Registry, SEPARATOR
from .resolver import resolve, suggest
from .signatures import DescriptorType, firstline
from .usage import render_help, render_signature, render_synopsis
from .utils import *
from .validator import validate

logger = logging.getLogger(__name__)


class Dispatcher(metaclass=DescriptorType):
    """
    Command dispatcher over a fixed set of providers.

    Parameters
    - providers: Registry | Mapping[int | str, provider] | Iterable[provider]
      str keys register a provider under an alias ("alias:operation").
    - prog: str | Unset, program name shown in synopsis and fault headers
      (defaults to __prog__ in __main__, then the basename of sys.argv[0]).
    - separator: str, alias separator (one character, ":" by default).
    - describer: Callable[[callable], str | None], documentation collaborator
      used by the help listing (first docstring line by default).
    - shell, fancy, colorful: bool runtime flags (see module docstring).

    The registry is built here, once; a provider that cannot be introspected is
    surfaced as ReflectionFailureError like any other fault.
    """
    __introspectable__ = (
        "registry",
        "prog",
        "shell",
        "fancy",
        "colorful",
    )

    def __init__(
            self,
            providers,
            /,
            *,
            prog=Unset,
            separator=SEPARATOR,
            describer=firstline,
            shell=False,
            fancy=False,
            colorful=False,
    ):
        if not callable(describer):
            raise TypeError(f"{type(self).__typename__} 'describer' must be callable")
        if prog is not Unset and not isinstance(prog, str):
            raise TypeError(f"{type(self).__typename__} 'prog' must be a string")

        self._prog = coalesce(prog, getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0])))
        self._describer = describer
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._registry = Unset

        if isinstance(providers, Registry):
            self._registry = providers
        else:
            try:
                self._registry = Registry(providers, separator=separator)
            except ReflectionFailureError as fault:
                self.trigger(fault)

    @property
    def registry(self):
        return self._registry

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this dispatcher's runtime flags merged in.
        """
        trigger(fault, **options, prog=self.prog, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def help(self, *, stderr=False, synopsis=True):
        """
        Print the help listing, preceded by the synopsis unless synopsis is False.
        """
        console = Console(stderr=stderr)
        renderable = render_help(self.registry, describer=self._describer, colorful=self.colorful)
        if synopsis:
            renderable = Group(render_synopsis(self.prog, colorful=self.colorful), Text(), renderable)
        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self.prog} HELP".upper(), " ", "]",
                                    style="bold #FF4D94" if self.colorful else ""),
                title_align="left",
            )
        console.print(renderable)

    def run(self, tokens, /):
        """
        Resolve, validate and invoke one command line (already tokenized).

        Returns
        - the operation's return value, or None when help was shown.
        """
        tokens = list(tokens)
        if not tokens:
            logger.debug("no command given, showing help")
            self.help()
            return None

        token, *arguments = tokens
        operation = resolve(self.registry, token)

        if operation is None:
            suggestions = suggest(self.registry, token)
            try:
                hint = "did you mean %r? you can also run '%s' to see all commands" % (suggestions[0], self.prog)
            except IndexError:
                hint = "run '%s' without arguments to see all commands" % self.prog
            try:
                return self.trigger(UnknownCommandError(
                    "unknown command %r at first position" % token,
                    title="unknown command",
                    code=FaultCode.UNKNOWN_COMMAND,
                    token=token,
                    suggestions=suggestions,
                    hint=hint,
                    docs=getdoc(FaultCode.UNKNOWN_COMMAND),
                ))
            finally:
                # shell mode: the fault is already on stderr, the listing follows it
                if self.shell:
                    self.help(stderr=True, synopsis=False)

        # lifecycle operations never resolve, so only non-public ones reach here
        if not operation.dispatchable:
            return self.trigger(ForbiddenOperationError(
                "command %r is not available (not public)" % token,
                title="forbidden operation",
                code=FaultCode.FORBIDDEN_OPERATION,
                operation=operation,
                hint="run '%s' without arguments to see all commands" % self.prog,
                docs=getdoc(FaultCode.FORBIDDEN_OPERATION),
            ))

        try:
            arguments = validate(operation, arguments)
        except ValidationError as fault:
            return self.trigger(fault, usage=render_signature(operation, colorful=self.colorful))

        callback = operation.bind()
        logger.debug("invoking %s with %d arguments", operation.qualname, len(arguments))
        return callback(*arguments)

    def __invoke__(self, prompt=Unset):
        """
        Execute one command line.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used verbatim.

        Raises
        - TypeError: when prompt is not Unset/str/Iterable[str].
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("__invoke__() argument must be a string or an iterable of strings")
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        return self.run(tokens)


def dispatch(providers, argv=Unset, /, **options):
    """
    Run the command line of the current process against providers.

    Parameters
    - providers: anything Dispatcher accepts.
    - argv: Sequence[str] | Unset, full argument vector (program name first);
      defaults to sys.argv.
    - **options: forwarded to Dispatcher. shell and colorful default to True here,
      prog defaults to the basename of argv[0].

    Returns
    - whatever the invoked operation returned (None after help).
    """
    argv = list(coalesce(argv, sys.argv))
    if argv:
        options.setdefault("prog", getattr(__import__("__main__"), "__prog__", os.path.basename(argv[0])))
    options.setdefault("shell", True)
    options.setdefault("colorful", True)
    return Dispatcher(providers, **options).__invoke__(argv[1:])


def invoke(object, prompt=Unset, /):
    """
    Convenience runner.

    - object implementing __invoke__: called with prompt.
    - Registry, mapping or list of providers: wrapped in a Dispatcher.
    - a single provider class: wrapped as the only, unaliased provider.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    if isinstance(object, Registry | Mapping) or (isinstance(object, Iterable) and not isinstance(object, str)):
        return invoke(Dispatcher(object), prompt)

    if isinstance(object, type):
        return invoke(Dispatcher([object]), prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method or be a provider")


__all__ = (
    "Dispatcher",
    "dispatch",
    "invoke",
)
