r"""
bazelflags catalog: flag definitions and the raw ordered catalog.

Overview
- FlagDefinition: immutable metadata for one flag as reported by the flag
  introspection data (`bazel help flags-as-proto`), plus the versions it exists in.
  • identity: canonical `name`, optional deprecated `old_name`, optional `abbreviation`.
  • applicability: ordered `commands` (sub-commands the flag is valid for).
  • value shape: `requires_value` (the value must follow, inline or as the next token).
  • versions: identifiers of the releases the flag is known under.
  • tags/docs: `metadata_tags`, `effect_tags`, `documentation`, `category`.
- FlagCatalog: the ordered definitions plus an optional version filter. Pure data;
  the lookup structures live in bazelflags.index.

Introspection & representation
- DefinitionType metaclass exposes the fields declared in __introspectable__ as
  read-only properties (see utils.mirror) and provides stable __repr__/__rich_repr__.

Validation (on construction)
- name: non-empty string.
- old_name/abbreviation/documentation/category/deprecation_warning: None or non-empty string.
- commands/versions/tags: iterables of strings (a bare string is rejected), frozen to tuples.
- Booleans are coerced with bool().

The index never validates; malformed records are rejected here, at the ingestion boundary.

Quick example:
    >>> jobs = FlagDefinition("jobs", abbreviation="j", commands=("build", "test"), requires_value=True)
    >>> jobs.supports_command("common")
    True
"""
import functools
import operator
import re
from collections.abc import Iterable

from .docs import render_markdown
from .utils import *


class DefinitionType(type):
    """
    Metaclass that turns definition classes into introspectable, read-only records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_<name>" field.
    - Provide stable __repr__/__rich_repr__ for diagnostics and pretty printers.
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used to prefix validation messages.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_text(cls, metadata, name, /, *, required=False):
    """
    Internal: validate a single optional (or required) text field in place.
    """
    object = metadata[name]
    if object is None and not required:
        return
    if not isinstance(object, str):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    if not object:
        raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")


def _sanitize_strings(cls, metadata, name, /):
    """
    Internal: validate an iterable of strings and freeze it into a tuple.

    A bare string is rejected, since iterating it would silently split it into characters.
    """
    object = metadata[name]
    if isinstance(object, (str, bytes)) or not isinstance(object, Iterable):
        raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of strings")
    sanitized = tuple(object)
    for item in sanitized:
        if not isinstance(item, str):
            raise TypeError(f"{cls.__typename__} {name!r} must only contain strings")
    metadata[name] = sanitized


class FlagDefinition(metaclass=DefinitionType):
    """
    Immutable metadata for a single flag.

    Instances are created once by the ingestion layer and then shared by every
    index built from them; identity (`is`) is what lookups hand back.

    Predicates
    - is_deprecated(): metadata tags contain "DEPRECATED".
    - is_noop(): effect tags contain "NO_OP".
    - supports_command(command): the pseudo-commands "common"/"always" are always
      accepted, otherwise the command must be listed in `commands`.
    """

    __introspectable__ = (
        "name",
        "old_name",
        "abbreviation",
        "commands",
        "requires_value",
        "has_negative_flag",
        "allows_multiple",
        "versions",
        "metadata_tags",
        "effect_tags",
        "documentation",
        "category",
        "deprecation_warning",
    )
    __displayable__ = (
        "name",
        "old_name",
        "abbreviation",
        "commands",
        "requires_value",
        "versions",
    )

    def __init__(
            self,
            name,
            /,
            *,
            old_name=None,
            abbreviation=None,
            commands=(),
            requires_value=False,
            has_negative_flag=False,
            allows_multiple=False,
            versions=(),
            metadata_tags=(),
            effect_tags=(),
            documentation=None,
            category=None,
            deprecation_warning=None,
    ):
        metadata = {
            "name": name,
            "old_name": old_name,
            "abbreviation": abbreviation,
            "commands": commands,
            "requires_value": bool(requires_value),
            "has_negative_flag": bool(has_negative_flag),
            "allows_multiple": bool(allows_multiple),
            "versions": versions,
            "metadata_tags": metadata_tags,
            "effect_tags": effect_tags,
            "documentation": documentation,
            "category": category,
            "deprecation_warning": deprecation_warning,
        }
        cls = type(self)
        _sanitize_text(cls, metadata, "name", required=True)
        for field in ("old_name", "abbreviation", "documentation", "category", "deprecation_warning"):
            _sanitize_text(cls, metadata, field)
        for field in ("commands", "versions", "metadata_tags", "effect_tags"):
            _sanitize_strings(cls, metadata, field)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def is_deprecated(self):
        return "DEPRECATED" in self._metadata_tags

    def is_noop(self):
        return "NO_OP" in self._effect_tags

    def supports_command(self, command, /):
        return command in ("common", "always") or command in self._commands

    def exists_in(self, version, /):
        """
        Whether this flag is known under the given version identifier.
        """
        return version in self._versions

    def get_documentation_markdown(self):
        """
        Render the hover/completion documentation for this flag as Markdown.

        See bazelflags.docs.render_markdown for the exact layout.
        """
        return render_markdown(self)


class FlagCatalog(metaclass=DefinitionType):
    """
    The raw, ordered list of flag definitions plus an optional version filter.

    The order is significant: positions become the slots of any index built
    from this catalog, and later entries win when names collide.
    """

    __introspectable__ = (
        "definitions",
        "version",
    )

    def __init__(self, definitions=(), /, version=None):
        if isinstance(definitions, (str, bytes)) or not isinstance(definitions, Iterable):
            raise TypeError(f"{type(self).__typename__} definitions must be iterable")
        definitions = tuple(definitions)
        for definition in definitions:
            if not isinstance(definition, FlagDefinition):
                raise TypeError(f"{type(self).__typename__} definitions must be flag definitions")
        if version is not None and not isinstance(version, str):
            raise TypeError(f"{type(self).__typename__} 'version' must be a string")
        self._definitions = definitions
        self._version = version

    def __len__(self):
        return len(self._definitions)

    def __iter__(self):
        return iter(self._definitions)

    def versions(self):
        """
        Sorted, deduplicated version identifiers mentioned by any definition.
        """
        return sorted({version for definition in self._definitions for version in definition.versions})

    def with_version(self, version, /):
        """
        Return a catalog over the same definitions with a different version filter.
        """
        return type(self)(self._definitions, version)


__all__ = (
    "FlagDefinition",
    "FlagCatalog",
)
