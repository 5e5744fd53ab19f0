"""
Flag definition and catalog tests (validation, predicates, read-only fields).

Scope
- Validate construction-time sanitization of definitions and catalogs.
- Validate the per-flag predicates used by validators and completion.
- Validate representations used in diagnostics.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from rich.console import Console

from bazelflags import FlagCatalog, FlagDefinition

from fixtures import catalog, definitions


class TestFlagDefinition(TestCase):
    """Behavioral tests for FlagDefinition."""

    def testDefaults(self):
        flag = FlagDefinition("verbose_failures")
        self.assertEqual(flag.name, "verbose_failures")
        self.assertIsNone(flag.old_name)
        self.assertIsNone(flag.abbreviation)
        self.assertEqual(flag.commands, ())
        self.assertFalse(flag.requires_value)
        self.assertFalse(flag.has_negative_flag)
        self.assertEqual(flag.versions, ())

    def testCollectionsAreFrozen(self):
        commands = ["build", "test"]
        flag = FlagDefinition("jobs", commands=commands)
        commands.append("run")
        self.assertEqual(flag.commands, ("build", "test"))

    def testFieldsAreReadOnly(self):
        flag = FlagDefinition("jobs")
        with self.assertRaises(AttributeError):
            flag.name = "other"  # type: ignore[misc]

    def testNameIsRequired(self):
        with self.assertRaises(ValueError):
            FlagDefinition("")
        with self.assertRaises(TypeError):
            FlagDefinition(None)  # type: ignore[arg-type]

    def testOptionalTextsRejectEmptyStrings(self):
        with self.assertRaises(ValueError):
            FlagDefinition("jobs", abbreviation="")
        with self.assertRaises(TypeError):
            FlagDefinition("jobs", old_name=3)  # type: ignore[arg-type]

    def testBareStringCollectionsRejected(self):
        with self.assertRaises(TypeError):
            FlagDefinition("jobs", commands="build")  # type: ignore[arg-type]
        with self.assertRaises(TypeError):
            FlagDefinition("jobs", versions=[7])  # type: ignore[list-item]

    def testDeprecatedAndNoopPredicates(self):
        flag = definitions()[6]
        self.assertTrue(flag.is_deprecated())
        self.assertTrue(flag.is_noop())
        self.assertFalse(definitions()[0].is_deprecated())
        self.assertFalse(definitions()[0].is_noop())

    def testSupportsCommand(self):
        jobs = definitions()[0]
        self.assertTrue(jobs.supports_command("build"))
        self.assertFalse(jobs.supports_command("startup"))
        startup = definitions()[4]
        self.assertTrue(startup.supports_command("common"))
        self.assertTrue(startup.supports_command("always"))
        self.assertFalse(startup.supports_command("import"))

    def testExistsIn(self):
        flag = definitions()[5]
        self.assertTrue(flag.exists_in("7.0.0"))
        self.assertFalse(flag.exists_in("8.0.0"))

    def testRepr(self):
        text = repr(FlagDefinition("jobs", abbreviation="j"))
        self.assertTrue(text.startswith("flag-definition("))
        self.assertIn("name='jobs'", text)
        self.assertIn("abbreviation='j'", text)

    def testRichRendering(self):
        console = Console(record=True, width=200, color_system=None)
        console.print(FlagDefinition("jobs"))
        self.assertIn("jobs", console.export_text())


class TestFlagCatalog(TestCase):
    """Behavioral tests for FlagCatalog."""

    def testOrderAndLength(self):
        flags = definitions()
        result = FlagCatalog(flags)
        self.assertEqual(len(result), len(flags))
        self.assertEqual([flag.name for flag in result], [flag.name for flag in flags])
        self.assertIsNone(result.version)

    def testVersions(self):
        self.assertEqual(catalog().versions(), ["7.0.0", "8.0.0"])
        self.assertEqual(FlagCatalog().versions(), [])

    def testWithVersion(self):
        filtered = catalog().with_version("8.0.0")
        self.assertEqual(filtered.version, "8.0.0")
        self.assertEqual(len(filtered), 7)

    def testRejectsForeignEntries(self):
        with self.assertRaises(TypeError):
            FlagCatalog(["jobs"])
        with self.assertRaises(TypeError):
            FlagCatalog("jobs")
        with self.assertRaises(TypeError):
            FlagCatalog([], 8)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
