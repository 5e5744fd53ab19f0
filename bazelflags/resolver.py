"""
Invocation resolution: which flag does a literal token refer to, and how was it named?

resolve(index, token) is total and pure. It never raises and never mutates the
index; "no match" is reported as None. The matched form is classified as:

- LookupType.NORMAL        `--keep_going`, `--nokeep_going`, `--keep_going=`
- LookupType.ALIAS         `--old_name` for a flag whose deprecated name is `old_name`
- LookupType.ABBREVIATION  `-k`

Rules
- one trailing '=' is ignored (the value part does not matter for naming).
- `--` forms: a third leading dash is rejected; a leading "no" is stripped when
  present and the rest is looked up in the name map (canonical and old names).
- `-` forms: looked up in the abbreviation map only; no "no" stripping, no aliases.
- anything else is not a flag invocation.

Note
- A flag whose real name starts with "no" cannot be told apart from the negation
  of a flag without that prefix. The stripped reading always wins.
"""
from enum import Enum


class LookupType(Enum):
    """
    Name form a flag was referred to by.
    """
    NORMAL = "normal"
    ALIAS = "alias"
    ABBREVIATION = "abbreviation"


def resolve(index, token, /):
    """
    Resolve a literal flag token against a FlagIndex.

    Returns
    - (LookupType, FlagDefinition) on a match.
    - None otherwise (including for non-string tokens).
    """
    if not isinstance(token, str):
        return None

    stripped = token.removesuffix("=")

    if stripped.startswith("--"):
        long_name = stripped[2:]
        if long_name.startswith("-"):
            return None
        candidate = long_name.removeprefix("no")
        try:
            slot = index.flags_by_name[candidate]
        except KeyError:
            return None
        flag = index.flags[slot]
        if flag.old_name is not None and flag.old_name == candidate:
            return LookupType.ALIAS, flag
        return LookupType.NORMAL, flag

    if stripped.startswith("-"):
        abbreviation = stripped[1:]
        if abbreviation.startswith("-"):
            return None
        try:
            slot = index.flags_by_abbreviation[abbreviation]
        except KeyError:
            return None
        return LookupType.ABBREVIATION, index.flags[slot]

    return None


__all__ = (
    "LookupType",
    "resolve",
)
