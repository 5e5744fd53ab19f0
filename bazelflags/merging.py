"""
Reattach values that were tokenized as separate occurrences.

`--jobs=200` reaches us as one occurrence (name "--jobs", value "200") but
`--jobs 200` arrives as two: "--jobs" and a bare "200". For flags whose metadata
says `requires_value`, the second occurrence is really the value of the first,
so the two are merged back into one occurrence.

Merge rules, per line, left to right
- unresolvable names, abbreviations (`-c opt` stays split, `-c=opt` is passed
  through verbatim) and occurrences that already carry an inline value are kept as-is.
- a resolved flag that requires a value swallows the next occurrence, if any:
  • next has name and value → "name=value", spanning name.start..value.end
  • next has only a name     → that token becomes the value
  • next has only a value    → that token becomes the value
  • next has neither         → nothing is attached, but the next occurrence is still dropped
- everything else is kept as-is.

The merged occurrence keeps its own name token and gains an inline value, so a
second pass over the output changes nothing. The one exception is an empty
occurrence after a value-requiring flag: the flag stays bare, and a second pass
lets it swallow whatever comes next.
"""
from .resolver import LookupType, resolve
from .tokens import Occurrence, Span, Spanned


def _absorb(following, /):
    """
    Value token synthesized from the occurrence that follows a value-requiring flag.
    """
    name, value = following.name, following.value
    if name is not None and value is not None:
        return Spanned(name.text + "=" + value.text, Span(name.span.start, value.span.end))
    if name is not None:
        return name
    return value


def merge_occurrences(occurrences, index, /):
    """
    Return a new occurrence list with separately written values reattached.

    The input sequence is never modified. The result is at most as long as the input
    and keeps the relative order of every occurrence that was not absorbed.
    """
    occurrences = list(occurrences)
    merged = []
    position = 0
    while position < len(occurrences):
        occurrence = occurrences[position]
        position += 1

        if occurrence.name is None or occurrence.value is not None:
            merged.append(occurrence)
            continue

        match resolve(index, occurrence.name.text):
            case (LookupType.ABBREVIATION, _) | None:
                merged.append(occurrence)
            case (_, flag) if flag.requires_value and position < len(occurrences):
                value = _absorb(occurrences[position])
                position += 1
                if value is None:
                    merged.append(occurrence)
                else:
                    merged.append(Occurrence(occurrence.name, value))
            case _:
                merged.append(occurrence)

    return merged


def combine_key_value_flags(lines, index, /):
    """
    Merge separately written flag values on every line, in place.

    Each line's `flags` list is replaced by the merged list; lines are otherwise untouched.
    Returns the same `lines` object for convenience.
    """
    for line in lines:
        line.flags = merge_occurrences(line.flags, index)
    return lines


__all__ = (
    "merge_occurrences",
    "combine_key_value_flags",
)
