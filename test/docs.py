"""
Documentation tests (command descriptions, Markdown escaping and rendering).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from bazelflags import COMMAND_DOCS, FlagDefinition, describe, escape_markdown, render_markdown


class TestCommandDocs(TestCase):

    def testPseudoCommandsAreDescribed(self):
        for command in ("startup", "common", "always", "import", "try-import"):
            with self.subTest(command=command):
                self.assertTrue(describe(command))

    def testUnknownCommand(self):
        self.assertIsNone(describe("frobnicate"))

    def testTableIsReadOnly(self):
        with self.assertRaises(TypeError):
            COMMAND_DOCS["build"] = "changed"  # type: ignore[index]
        self.assertEqual(COMMAND_DOCS["build"], "Builds the specified targets.")


class TestMarkdown(TestCase):

    def testEscapeMarkdown(self):
        self.assertEqual(escape_markdown("a_b*c"), r"a\_b\*c")
        self.assertEqual(escape_markdown("[x](y)"), r"\[x\]\(y\)")
        self.assertEqual(escape_markdown("1.0-rc!"), r"1\.0\-rc\!")
        self.assertEqual(escape_markdown("\\`#+~{}<>"), r"\\\`\#\+\~\{\}\<\>")
        self.assertEqual(escape_markdown("plain text"), "plain text")

    def testEscapeMarkdownRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            escape_markdown(None)  # type: ignore[arg-type]

    def testMinimalFlag(self):
        self.assertEqual(render_markdown(FlagDefinition("jobs")), "`--jobs`\n\n")

    def testFullFlag(self):
        flag = FlagDefinition(
            "keep_going",
            abbreviation="k",
            has_negative_flag=True,
            documentation="Continue as much as possible after an error in %{product}.",
            effect_tags=("EAGERNESS_TO_EXIT",),
            metadata_tags=("DEPRECATED", "EXPERIMENTAL"),
            category="STRATEGY",
        )
        self.assertEqual(
            flag.get_documentation_markdown(),
            "`--keep_going` [`-k`], `--nokeep_going`\n"
            "\n"
            "Continue as much as possible after an error in Bazel\\.\n"
            "\n"
            "Effect tags: eagerness_to_exit\n"
            "Tags: deprecated, experimental\n"
            "Category: strategy\n",
        )

    def testMethodMatchesFunction(self):
        flag = FlagDefinition("jobs", documentation="Run *many* jobs", category="EXECUTION")
        self.assertEqual(flag.get_documentation_markdown(), render_markdown(flag))


if __name__ == "__main__":
    unittest.main()
