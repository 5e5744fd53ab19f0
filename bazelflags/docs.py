"""
Static sub-command descriptions and Markdown rendering of flag documentation.

COMMAND_DOCS is a read-only, process-wide table built at import time. It covers
the regular sub-commands (wording from `bazel help`) and the bazelrc-only
pseudo-commands `startup`, `common`, `always`, `import` and `try-import`.
"""
import re
from types import MappingProxyType


COMMAND_DOCS = MappingProxyType({
    # Sub-commands, as described by `bazel help`
    "analyze-profile": "Analyzes build profile data.",
    "aquery": "Analyzes the given targets and queries the action graph.",
    "build": "Builds the specified targets.",
    "canonicalize-flags": "Canonicalizes a list of bazel options.",
    "clean": "Removes output files and optionally stops the server.",
    "coverage": "Generates code coverage report for specified test targets.",
    "cquery": "Loads, analyzes, and queries the specified targets w/ configurations.",
    "dump": "Dumps the internal state of the bazel server process.",
    "fetch": "Fetches external repositories that are prerequisites to the targets.",
    "help": "Prints help for commands, or the index.",
    "info": "Displays runtime info about the bazel server.",
    "license": "Prints the license of this software.",
    "mobile-install": "Installs targets to mobile devices.",
    "mod": "Queries the Bzlmod external dependency graph",
    "print_action": "Prints the command line args for compiling a file.",
    "query": "Executes a dependency graph query.",
    "run": "Runs the specified target.",
    "shutdown": "Stops the bazel server.",
    "sync": "Syncs all repositories specified in the workspace file",
    "test": "Builds and runs the specified test targets.",
    "vendor": "Fetches external repositories into a specific folder specified by the flag --vendor_dir.",
    "version": "Prints version information for bazel.",
    # bazelrc-only pseudo-commands
    "startup": "Startup options, which go before the command, and are described in `bazel help startup_options`.",
    "common": (
        "Options that should be applied to all Bazel commands that support them. "
        "If a command does not support an option specified in this way, the option is ignored "
        "so long as it is valid for some other Bazel command. "
        "Note that this only applies to option names: If the current command accepts an option "
        "with the specified name, but doesn't support the specified value, it will fail."
    ),
    "always": (
        "Options that apply to all Bazel commands. "
        "If a command does not support an option specified in this way, it will fail."
    ),
    # Directives
    "import": "Imports the given file. Fails if the file is not found.",
    "try-import": "Tries to import the given file. Does not fail if the file is not found.",
})


def describe(command, /):
    """
    Short human description of a sub-command, or None when unknown.
    """
    return COMMAND_DOCS.get(command)


_MARKDOWN_SPECIALS = re.compile(r"([\\`*_#+\-.!~{}\[\]()<>])")


def escape_markdown(text, /):
    r"""
    Backslash-escape every Markdown metacharacter in `text`.

    Escaped: \ ` * _ # + - . ! ~ { } [ ] ( ) < >
    """
    if not isinstance(text, str):
        raise TypeError("escape_markdown() argument must be a string")
    return _MARKDOWN_SPECIALS.sub(r"\\\1", text)


def render_markdown(flag, /):
    """
    Render the documentation of a flag definition as Markdown.

    Layout
    - first line: `--name`, then ` [`-abbr`]` and `, `--noname`` when applicable.
    - the escaped documentation text (with %{product} spelled out as "Bazel").
    - "Effect tags: ...", "Tags: ..." and "Category: ..." lines, lowercased,
      each only when present.
    """
    result = "`--%s`" % flag.name
    if flag.abbreviation is not None:
        result += " [`-%s`]" % flag.abbreviation
    if flag.has_negative_flag:
        result += ", `--no%s`" % flag.name

    if flag.documentation is not None:
        result += "\n\n"
        result += escape_markdown(flag.documentation.replace("%{product}", "Bazel"))

    result += "\n\n"
    if flag.effect_tags:
        result += "Effect tags: %s\n" % ", ".join(tag.lower() for tag in flag.effect_tags)
    if flag.metadata_tags:
        result += "Tags: %s\n" % ", ".join(tag.lower() for tag in flag.metadata_tags)
    if flag.category is not None:
        result += "Category: %s\n" % flag.category.lower()

    return result


__all__ = (
    "COMMAND_DOCS",
    "describe",
    "escape_markdown",
    "render_markdown",
)
