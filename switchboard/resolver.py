"""
Switchboard command resolver.

resolve(registry, token) maps a command token to the Operation it denotes:

- providers are walked in registry order, operations in declaration order;
- an operation matches when its bare name equals the token, or, for an aliased
  provider, when "alias" + separator + name equals the token;
- the first match wins. An aliased operation is therefore reachable by its bare name
  unless an earlier provider declares the same name, while the qualified form always
  reaches the aliased provider.

The returned Operation carries the bare name (alias prefix stripped); that name is
what gets validated and invoked. Resolution never touches live objects and is a pure
function of (registry, token).
"""
import difflib
import logging

logger = logging.getLogger(__name__)


def resolve(registry, token, /):
    """
    Return the Operation denoted by token, or None when nothing matches.
    """
    if not isinstance(token, str):
        raise TypeError("resolve() token must be a string")

    for provider in registry:
        for operation in provider.operations:
            if operation.name == token:
                logger.debug("resolved %r to %s.%s", token, provider.name, operation.name)
                return operation
            if provider.alias is not None and operation.qualname == token:
                logger.debug("resolved %r to %s.%s via alias %r", token, provider.name, operation.name, provider.alias)
                return operation

    logger.debug("unable to resolve %r", token)
    return None


def commands(registry, /):
    """
    Yield every user-facing command name (alias-qualified where aliased), in registry order.
    """
    for provider in registry:
        for operation in provider.operations:
            if operation.dispatchable:
                yield operation.qualname


def suggest(registry, token, /, limit=5):
    """
    Return up to limit close command names for a mistyped token (best first).
    """
    return difflib.get_close_matches(token, list(dict.fromkeys(commands(registry))), limit)


__all__ = (
    "resolve",
    "commands",
    "suggest",
)
