"""
Usage renderer tests (parameter shapes, usage lines, help listing layout).

Scope
- Validate render_parameter()/render_usage() plain forms.
- Validate render_help(): provider order, alias qualification, column padding,
  hidden and lifecycle operations, the documentation collaborator.
- Validate that styling never changes the plain text.

Conventions
- Test method names follow CamelCase per project convention.
- Assertions compare str(text), the unstyled form of rich Text.
"""
from __future__ import annotations

import unittest
from unittest import TestCase

from switchboard import Parameter, Registry
from switchboard.resolver import resolve
from switchboard.usage import render_parameter, render_usage, render_help, render_signature, render_synopsis


class Math:
    def __init__(self):
        pass

    def add(self, a: int, b: int):
        """Add two integers."""

    def _hidden(self):
        pass


class Database:
    def list(self, table: str = None):
        """List rows.

        Only the first line is shown.
        """


class Long:
    def synchronize_everything(self):
        pass

    def go(self, x):
        pass


class TestRenderParameter(TestCase):
    """Behavioral tests for render_parameter()."""

    def testRequiredTyped(self):
        self.assertEqual(str(render_parameter(Parameter("a", "int"))), "<int $a>")

    def testRequiredUntyped(self):
        self.assertEqual(str(render_parameter(Parameter("a"))), "<$a>")

    def testOptionalWithDefault(self):
        self.assertEqual(str(render_parameter(Parameter("a", "int", 5))), "<[int $a = 5]>")

    def testNoneDefaultRendersNull(self):
        self.assertEqual(str(render_parameter(Parameter("name", None, None))), "<[$name = NULL]>")

    def testStringDefaultIsInterpolated(self):
        self.assertEqual(str(render_parameter(Parameter("mode", "str", "fast"))), "<[str $mode = fast]>")
        self.assertEqual(str(render_parameter(Parameter("flag", None, True))), "<[$flag = True]>")

    def testVariadic(self):
        self.assertEqual(str(render_parameter(Parameter("words", variadic=True))), "<[...$words]>")
        self.assertEqual(str(render_parameter(Parameter("n", "int", variadic=True))), "<[int ...$n]>")

    def testUnrecognizedTypeIsStillRendered(self):
        self.assertEqual(str(render_parameter(Parameter("path", "Path"))), "<Path $path>")

    def testColorDoesNotChangePlainText(self):
        parameter = Parameter("a", "int", 5)
        styled = render_parameter(parameter, colorful=True)
        plain = render_parameter(parameter, colorful=False)
        self.assertEqual(styled.plain, plain.plain)
        self.assertTrue(styled.spans)
        self.assertFalse(plain.spans)


class TestRenderUsage(TestCase):
    """Behavioral tests for render_usage()/render_signature()/render_synopsis()."""

    def testEmpty(self):
        self.assertEqual(str(render_usage([])), "")

    def testJoinedWithTrailingSpace(self):
        usage = render_usage([Parameter("a", "int"), Parameter("b", "int", 2)])
        self.assertEqual(str(usage), "<int $a> <[int $b = 2]> ")

    def testSignatureUsesQualifiedName(self):
        registry = Registry({"db": Database})
        operation = resolve(registry, "db:list")
        self.assertEqual(str(render_signature(operation)), "db:list <[str $table = NULL]> ")

    def testSynopsis(self):
        self.assertEqual(str(render_synopsis("tool")), "Usage:\n tool command [arguments]")

    def testSynopsisWithoutProg(self):
        self.assertEqual(str(render_synopsis()), "Usage:\n command [arguments]")


class TestRenderHelp(TestCase):
    """Behavioral tests for render_help()."""

    def testListing(self):
        help = render_help(Registry({0: Math, "db": Database}), colorful=False)
        self.assertEqual(
            str(help),
            "Available commands:\n"
            " add       <int $a> <int $b> Add two integers.\n"
            " db:list   <[str $table = NULL]> List rows."
        )

    def testHiddenAndLifecycleAreNotListed(self):
        help = str(render_help(Registry([Math])))
        self.assertNotIn("_hidden", help)
        self.assertNotIn("__init__", help)

    def testPaddingFollowsLongestNameOfProvider(self):
        help = str(render_help(Registry([Long])))
        width = len("synchronize_everything") + 2
        self.assertIn("\n " + "go".ljust(width) + "<$x> ", help)
        self.assertIn("\n " + "synchronize_everything".ljust(width) + "\n", help)

    def testPaddingIsPerProvider(self):
        help = str(render_help(Registry([Long, Math])))
        self.assertIn("\n " + "add".ljust(10) + "<int $a>", help)

    def testCustomDescriber(self):
        help = str(render_help(Registry([Math]), describer=lambda callback: callback.__name__.upper()))
        self.assertTrue(help.endswith("<int $a> <int $b> ADD"))

    def testDescriberReturningNoneAddsNothing(self):
        help = str(render_help(Registry([Math]), describer=lambda callback: None))
        self.assertTrue(help.endswith("<int $a> <int $b> "))

    def testEmptyRegistry(self):
        self.assertEqual(str(render_help(Registry([]))), "Available commands:")


if __name__ == "__main__":
    unittest.main()
