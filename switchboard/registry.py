"""
Switchboard registry: the static command table built once at startup.

What this module provides
- Provider: a provider source (class or instance) with an optional alias and its
  operation descriptors, computed once.
- Registry: ordered, read-only mapping from alias-or-index to Provider.

Accepted shapes
- Mapping: str keys are aliases, int keys are positional (unaliased) entries.
      Registry({0: Math, "db": Database})
- Iterable: every provider is unaliased, keyed by its position.
      Registry([Math, Strings])

Invariants
- Aliases are unique (mapping keys), non-empty, and never contain the separator.
- Operation names are unique within a provider (class namespaces guarantee it).
- Insertion order is kept; it drives help listing and the first-match tie-break.
"""
import logging
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .signatures import DescriptorType, operations

logger = logging.getLogger(__name__)

SEPARATOR = ":"


class Provider(metaclass=DescriptorType):
    """
    A provider source registered under an optional alias.

    Fields
    - source: the class (instantiated lazily for instance operations) or instance.
    - alias: str | None.
    - operations: tuple[Operation, ...], non-lifecycle operations in declaration order.
    """
    __introspectable__ = (
        "source",
        "alias",
        "operations",
    )

    def __init__(self, source, /, alias=None, *, separator=SEPARATOR):
        if alias is not None:
            if not isinstance(alias, str):
                raise TypeError(f"{type(self).__typename__} 'alias' must be a string")
            elif not (alias := alias.strip()):
                raise ValueError(f"{type(self).__typename__} 'alias' must be a non-empty string")
            elif separator in alias or re.search(r"\s", alias):
                raise ValueError(
                    f"{type(self).__typename__} 'alias' {alias!r} cannot contain whitespace or {separator!r}"
                )
        self._source = source
        self._alias = alias
        self._operations = operations(source, alias=alias, separator=separator)

    @property
    def source(self):
        return self._source

    @property
    def name(self):
        """
        Display label of the provider (its class name).
        """
        return getattr(self._source, "__qualname__", type(self._source).__qualname__)


class Registry(metaclass=DescriptorType):
    """
    Ordered, read-only registry of providers.

    Iteration yields Provider records in insertion order; indexing accepts the
    original alias-or-index key.
    """
    __introspectable__ = (
        "providers",
        "separator",
    )

    def __init__(self, source, /, *, separator=SEPARATOR):
        if not isinstance(separator, str) or len(separator) != 1 or separator.isspace():
            raise ValueError(f"{type(self).__typename__} 'separator' must be a single non-blank character")

        if isinstance(source, Registry):
            source = {provider.alias if provider.alias is not None else index: provider.source
                      for index, provider in enumerate(source)}
        elif isinstance(source, Mapping):
            pass
        elif isinstance(source, Iterable) and not isinstance(source, str):
            source = dict(enumerate(source))
        else:
            raise TypeError(f"{type(self).__typename__} 'source' must be a mapping or an iterable of providers")

        providers = {}
        for key, provider in source.items():
            if isinstance(key, bool) or not isinstance(key, int | str):
                raise TypeError(f"{type(self).__typename__} key {key!r} must be an alias or a position")
            providers[key] = Provider(provider, key if isinstance(key, str) else None, separator=separator)
            logger.debug(
                "registered provider %s%s with %d operations",
                providers[key].name,
                " as %r" % key if isinstance(key, str) else "",
                len(providers[key].operations),
            )

        aliases = [provider.alias for provider in providers.values() if provider.alias is not None]
        if len(aliases) != len(set(aliases)):
            raise ValueError(f"{type(self).__typename__} aliases must be unique")

        self._providers = MappingProxyType(providers)
        self._separator = separator

    @property
    def providers(self):
        return self._providers

    def __iter__(self):
        return iter(self._providers.values())

    def __len__(self):
        return len(self._providers)

    def __getitem__(self, key):
        return self._providers[key]


__all__ = (
    "Provider",
    "Registry",
    "SEPARATOR",
)
