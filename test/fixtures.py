"""
Shared flag definitions for the test suite.

The catalog mirrors a small slice of real Bazel flags, with a couple of
removed-in-a-later-release entries to exercise the version filter.
"""
from bazelflags import FlagDefinition, FlagCatalog, Occurrence, Spanned


def definitions():
    return [
        FlagDefinition(
            "jobs",
            abbreviation="j",
            commands=("build", "test", "fetch"),
            requires_value=True,
            versions=("7.0.0", "8.0.0"),
            documentation="The number of concurrent jobs to run.",
            category="EXECUTION_STRATEGY",
            effect_tags=("HOST_MACHINE_RESOURCE_OPTIMIZATIONS", "EXECUTION"),
        ),
        FlagDefinition(
            "keep_going",
            abbreviation="k",
            commands=("build", "test"),
            has_negative_flag=True,
            versions=("7.0.0", "8.0.0"),
        ),
        FlagDefinition(
            "compilation_mode",
            abbreviation="c",
            commands=("build", "test", "run"),
            requires_value=True,
            versions=("7.0.0", "8.0.0"),
        ),
        FlagDefinition(
            "remote_cache",
            old_name="remote_http_cache",
            commands=("build", "fetch", "test"),
            requires_value=True,
            versions=("7.0.0", "8.0.0"),
        ),
        FlagDefinition(
            "preemptible",
            commands=("startup",),
            has_negative_flag=True,
            versions=("7.0.0", "8.0.0"),
        ),
        FlagDefinition(
            "python3_path",
            commands=("build", "test"),
            requires_value=True,
            versions=("7.0.0",),
        ),
        FlagDefinition(
            "experimental_action_listener",
            commands=("build",),
            versions=("7.0.0", "8.0.0"),
            metadata_tags=("DEPRECATED",),
            effect_tags=("NO_OP",),
        ),
    ]


def catalog(version=None):
    return FlagCatalog(definitions(), version)


def occurrence(name=None, value=None, *, start=0):
    """
    Build an occurrence from plain strings; the value span follows the name span.
    """
    name = Spanned.at(name, start) if name is not None else None
    offset = name.span.end + 1 if name is not None else start
    value = Spanned.at(value, offset) if value is not None else None
    return Occurrence(name, value)


def texts(occurrences):
    """
    Flatten occurrences into (name-text, value-text) pairs for readable assertions.
    """
    return [
        (
            item.name.text if item.name is not None else None,
            item.value.text if item.value is not None else None,
        )
        for item in occurrences
    ]
