"""
bazelflags faults (ingestion errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every ingestion failure, so hosts
  (language servers, linters) can match on them in logs and searches.
- CatalogException: base type carrying message + read-only options, able to
  render itself with rich and to be re-targeted through copy.replace().
- LaunchError / NonZeroExitError / DecodeError: the distinct failure kinds of
  loading a flag catalog.
- trigger(): central entry point to surface a fault (raise, or print in shell mode).
- getdoc(): optional description lookup for a code from the host application;
  loaders attach it as the `docs` option, rendered under the hint.

The index, resolver and merger never raise; only catalog ingestion does.

Integration
- Loaders raise faults with trigger(fault, shell=False) by default.
- A host may expose __codes__, __styles__, __docs__ and __prog__ in __main__ to
  relabel codes, restyle output and name the program in headers.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes for catalog ingestion (stable identifiers).

    grouping
    - process (2110x): LAUNCH_FAILURE, NON_ZERO_EXIT
    - payload (2111x): DECODE_FAILURE, MALFORMED_RECORD
    """
    # --- process errors (21xxx) ---
    LAUNCH_FAILURE              = 21101
    NON_ZERO_EXIT               = 21102

    # --- payload errors (21xxx) ---
    DECODE_FAILURE              = 21111
    MALFORMED_RECORD            = 21112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CatalogException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "detail-label": "bold #9CA3AF",
            "detail": "#9CA3AF",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
            "docs": "dim #9CA3AF",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", "bazelflags"), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not None else "?", styler("code")),
            " | ",
            text(str(self.options.get("title", type(self).__name__)).title(), styler("error-title")),
            " ]"
        )
        parts = [text(self.message, styler("error-message"))]
        for label, detail in self.options.get("details", ()):
            parts.append(Text.assemble(text(label + ": ", styler("detail-label")), text(detail, styler("detail"))))
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        if docs := self.options.get("docs"):
            parts.append(text(docs, styler("docs")))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class LaunchError(CatalogException):
    """
    The flag introspection binary could not be started at all.
    """

    @property
    def command(self):
        return self.options.get("command")

    @property
    def reason(self):
        return self.options.get("reason")


class NonZeroExitError(CatalogException):
    """
    The flag introspection binary ran but exited unsuccessfully.
    """

    @property
    def command(self):
        return self.options.get("command")

    @property
    def status(self):
        return self.options.get("status")

    @property
    def stdout(self):
        return self.options.get("stdout", "")

    @property
    def stderr(self):
        return self.options.get("stderr", "")


class DecodeError(CatalogException):
    """
    The catalog payload could not be decoded.

    `stage` names the failing layer: "base64", "lz4", "protobuf", "gzip", "json" or "record".
    """

    @property
    def stage(self):
        return self.options.get("stage")

    @property
    def payload(self):
        return self.options.get("payload")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CatalogException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, the fault is printed through the rich console; otherwise it is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code from a host __docs__ mapping in __main__.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CatalogException",
    "LaunchError",
    "NonZeroExitError",
    "DecodeError",
    "FaultCode",
    "trigger",
    "getdoc",
)
