"""
Token shape tests (spans, spanned text, occurrences and lines).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from bazelflags import Line, Occurrence, Span, Spanned


class TestTokens(TestCase):

    def testSpannedAt(self):
        token = Spanned.at("--jobs", 6)
        self.assertEqual(token, Spanned("--jobs", Span(6, 12)))
        self.assertEqual(token.span.length, 6)

    def testInvertedSpanHasNoLength(self):
        self.assertEqual(Span(5, 3).length, 0)

    def testOccurrenceDefaults(self):
        self.assertEqual(Occurrence(), Occurrence(None, None))
        self.assertIsNone(Occurrence(Spanned.at("-k", 0)).value)

    def testLineCopiesItsFlags(self):
        flags = [Occurrence(Spanned.at("-k", 0))]
        line = Line(flags)
        flags.append(Occurrence())
        self.assertEqual(len(line.flags), 1)
        self.assertIsNone(line.command)

    def testLineEquality(self):
        self.assertEqual(Line([Occurrence()]), Line([Occurrence()]))
        self.assertNotEqual(Line([Occurrence()]), Line([Occurrence()], command=Spanned.at("build", 0)))
        with self.assertRaises(TypeError):
            hash(Line())


if __name__ == "__main__":
    unittest.main()
