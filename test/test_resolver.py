"""
Resolver and registry tests (first-match precedence, aliases, suggestions).

Scope
- Validate resolve(): exact names, alias-qualified names, registry-order tie-break.
- Validate that lifecycle operations never resolve, and non-public ones resolve
  as non-dispatchable.
- Validate Registry construction rules (aliases, keys, separator).

Conventions
- Test method names follow CamelCase per project convention.
"""
from __future__ import annotations

import unittest
from unittest import TestCase

from switchboard import Registry, Provider
from switchboard.resolver import resolve, suggest, commands


class Math:
    def add(self, a: int, b: int):
        pass

    def list(self):
        pass

    def _secret(self):
        pass

    def __init__(self):
        pass


class Database:
    def list(self, table: str = None):
        pass

    def drop(self, table: str):
        pass


class TestResolve(TestCase):
    """Behavioral tests for resolve()."""

    def setUp(self):
        self.registry = Registry({0: Math, "db": Database})

    def testExactNameResolves(self):
        operation = resolve(self.registry, "add")
        self.assertIs(operation.provider, Math)
        self.assertEqual(operation.name, "add")

    def testEarlierUnaliasedProviderWinsBareName(self):
        self.assertIs(resolve(self.registry, "list").provider, Math)

    def testAliasQualifiedNameAlwaysReachesAliasedProvider(self):
        operation = resolve(self.registry, "db:list")
        self.assertIs(operation.provider, Database)
        self.assertEqual(operation.name, "list")
        self.assertEqual(operation.qualname, "db:list")

    def testAliasedOperationReachableByBareName(self):
        self.assertIs(resolve(self.registry, "drop").provider, Database)

    def testRegistryOrderDecidesTieBreak(self):
        registry = Registry({"db": Database, 0: Math})
        self.assertIs(resolve(registry, "list").provider, Database)
        self.assertIs(resolve(registry, "db:list").provider, Database)

    def testUnaliasedProviderHasNoQualifiedForm(self):
        self.assertIsNone(resolve(self.registry, "db:add"))

    def testUnknownTokenIsUnresolved(self):
        self.assertIsNone(resolve(self.registry, "mul"))

    def testLifecycleNeverResolves(self):
        self.assertIsNone(resolve(self.registry, "__init__"))

    def testNonPublicResolvesButIsNotDispatchable(self):
        operation = resolve(self.registry, "_secret")
        self.assertIsNotNone(operation)
        self.assertFalse(operation.dispatchable)

    def testResolveIsPure(self):
        self.assertIs(resolve(self.registry, "db:list"), resolve(self.registry, "db:list"))
        self.assertIs(resolve(self.registry, "list"), resolve(self.registry, "list"))

    def testCustomSeparator(self):
        registry = Registry({"db": Database}, separator=".")
        self.assertIs(resolve(registry, "db.drop").provider, Database)
        self.assertIsNone(resolve(registry, "db:drop"))

    def testNonStringTokenRejected(self):
        with self.assertRaises(TypeError):
            resolve(self.registry, 1)

    def testResolutionIsLogged(self):
        with self.assertLogs("switchboard.resolver", "DEBUG") as logs:
            resolve(self.registry, "db:list")
        self.assertTrue(any("via alias 'db'" in line for line in logs.output))


class TestSuggest(TestCase):
    """Behavioral tests for suggest()/commands()."""

    def setUp(self):
        self.registry = Registry({0: Math, "db": Database})

    def testCommandsListsDispatchableQualifiedNames(self):
        self.assertEqual(list(commands(self.registry)), ["add", "list", "db:list", "db:drop"])

    def testSuggestFindsCloseNames(self):
        self.assertIn("add", suggest(self.registry, "ad"))
        self.assertIn("db:drop", suggest(self.registry, "db:drp"))

    def testSuggestNeverOffersHiddenOperations(self):
        self.assertNotIn("_secret", suggest(self.registry, "_secrt"))


class TestRegistry(TestCase):
    """Behavioral tests for Registry/Provider construction."""

    def testIterablesAreUnaliased(self):
        registry = Registry([Math, Database])
        self.assertEqual([provider.alias for provider in registry], [None, None])
        self.assertEqual(len(registry), 2)
        self.assertIs(registry[1].source, Database)

    def testMappingKeepsInsertionOrder(self):
        registry = Registry({"db": Database, 0: Math})
        self.assertEqual([provider.name for provider in registry], ["Database", "Math"])

    def testRegistryIsReadOnly(self):
        registry = Registry([Math])
        with self.assertRaises(TypeError):
            registry.providers[1] = Database

    def testRegistryFromRegistry(self):
        registry = Registry(Registry({0: Math, "db": Database}))
        self.assertEqual(registry["db"].alias, "db")

    def testAliasCannotContainSeparator(self):
        with self.assertRaises(ValueError):
            Registry({"d:b": Database})

    def testAliasCannotBeBlank(self):
        with self.assertRaises(ValueError):
            Provider(Database, "  ")

    def testAliasesMustBeUniqueAfterTrimming(self):
        with self.assertRaises(ValueError):
            Registry({"db": Database, " db": Math})

    def testKeysMustBeAliasesOrPositions(self):
        with self.assertRaises(TypeError):
            Registry({1.5: Math})

    def testSeparatorMustBeOneCharacter(self):
        with self.assertRaises(ValueError):
            Registry([Math], separator="::")

    def testSourceMustBeMappingOrIterable(self):
        with self.assertRaises(TypeError):
            Registry(42)

    def testInstanceProvider(self):
        registry = Registry({"db": Database()})
        self.assertEqual(registry["db"].name, "Database")


if __name__ == "__main__":
    unittest.main()
