"""
Token-level data shared with the (external) bazelrc/command-line tokenizer.

The tokenizer turns a source line such as

    build --jobs 200 -k --config=ci

into a `Line` whose `flags` list holds one `Occurrence` per tokenized unit. Each
occurrence carries an optional name token and an optional value token, both
`Spanned` (text + source `Span`). Nothing in this module parses text; it only
describes the shapes that the merger and validators exchange.

Ownership
- `Span`, `Spanned` and `Occurrence` are immutable tuples.
- `Line.flags` is owned per line and is replaced wholesale by the merger.
"""
from collections import namedtuple


class Span(namedtuple("Span", ("start", "end"))):
    """
    Half-open [start, end) character range inside a source document.
    """
    __slots__ = ()

    @property
    def length(self):
        return max(self.end - self.start, 0)


class Spanned(namedtuple("Spanned", ("text", "span"))):
    """
    A piece of source text together with the span it was read from.
    """
    __slots__ = ()

    @classmethod
    def at(cls, text, start, /):
        """
        Build a token starting at `start` whose span covers exactly `text`.
        """
        return cls(text, Span(start, start + len(text)))


class Occurrence(namedtuple("Occurrence", ("name", "value"), defaults=(None, None))):
    """
    One tokenized flag unit on a line.

    - name: Spanned | None, the flag-shaped part (e.g. "--jobs", "-k", or a bare word).
    - value: Spanned | None, the value-shaped part written inline after '='.

    At least one of the two is normally present, but neither is required.
    """
    __slots__ = ()

    def __rich_repr__(self):
        yield "name", self.name.text if self.name is not None else None
        yield "value", self.value.text if self.value is not None else None


class Line:
    """
    Per-line container produced by the tokenizer.

    - command: Spanned | None, the leading sub-command token (e.g. "build").
    - flags: list[Occurrence], ordered as written on the line.
    """
    __slots__ = ("command", "flags")

    def __init__(self, flags=(), /, command=None):
        self.command = command
        self.flags = list(flags)

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self.command == other.command and self.flags == other.flags

    __hash__ = None

    def __repr__(self):
        return f"line(command={self.command!r}, flags={self.flags!r})"

    def __rich_repr__(self):
        yield "command", self.command
        yield "flags", self.flags


__all__ = (
    "Span",
    "Spanned",
    "Occurrence",
    "Line",
)
