"""
FlagIndex: the immutable lookup structures built once from a flag catalog.

Construction
- Every definition keeps its catalog position as its slot; all maps store slots,
  never the definitions themselves.
- With a version filter, definitions that do not list that version are skipped
  while indexing. They still occupy their slot in `flags`, so slots stay stable
  whichever filter is used, but no map can reach them.
- flags_by_name holds canonical and old names in one namespace. An old name that
  collides with an earlier canonical name overwrites it (catalog order, last wins).
- flags_by_abbreviation is a separate namespace used only for `-x` forms.
- flags_by_command maps each sub-command to its slots in catalog order, plus:
  • "common": sorted, deduplicated union of every real sub-command's slots.
  • "always": the very same list. A strict intersection would be empty, since no
    flag is valid for every sub-command, so the union is reused on purpose.
- commands lists every key of flags_by_command followed by the directive
  pseudo-commands "import" and "try-import", which own no slots.

Empty and fully filtered catalogs are valid and simply produce empty maps.
The index is read-only after construction and can be shared between threads.
"""
import logging
from types import MappingProxyType

from .catalog import FlagCatalog
from .resolver import resolve
from .utils import *

logger = logging.getLogger(__name__)

DIRECTIVES = ("import", "try-import")


class FlagIndex:
    """
    Read-only lookup structures over an ordered sequence of flag definitions.

    Parameters
    - definitions: Iterable[FlagDefinition], in catalog order.
    - version: Unset | None | str. Only definitions listing this version are indexed.
      Unset and None both mean "no filter".
    """

    def __init__(self, definitions=(), /, version=Unset):
        self._flags = tuple(definitions)
        self._version = coalesce(version)

        by_command = {}
        by_name = {}
        by_abbreviation = {}
        indexed = 0
        for slot, flag in enumerate(self._flags):
            if self._version is not None and not flag.exists_in(self._version):
                continue
            indexed += 1
            by_name[flag.name] = slot
            if flag.old_name is not None:
                by_name[flag.old_name] = slot
            if flag.abbreviation is not None:
                by_abbreviation[flag.abbreviation] = slot
            for command in flag.commands:
                by_command.setdefault(command, []).append(slot)

        common = tuple(sorted({slot for slots in by_command.values() for slot in slots}))
        by_command = {command: tuple(slots) for command, slots in by_command.items()}
        by_command["common"] = common
        by_command["always"] = common

        self._flags_by_command = MappingProxyType(by_command)
        self._flags_by_name = MappingProxyType(by_name)
        self._flags_by_abbreviation = MappingProxyType(by_abbreviation)
        self._commands = (*by_command, *DIRECTIVES)

        logger.debug(
            "indexed %d of %d flags (version=%r) across %d commands",
            indexed, len(self._flags), self._version, len(by_command) - 2,
        )

    @classmethod
    def from_catalog(cls, catalog, /):
        """
        Build an index from a FlagCatalog, honouring its version filter.
        """
        if not isinstance(catalog, FlagCatalog):
            raise TypeError("from_catalog() argument must be a flag catalog")
        return cls(catalog.definitions, catalog.version)

    @property
    def flags(self):
        """
        Every definition, indexed or not, in slot order.
        """
        return self._flags

    @property
    def version(self):
        return self._version

    @property
    def commands(self):
        return self._commands

    @property
    def flags_by_command(self):
        return self._flags_by_command

    @property
    def flags_by_name(self):
        return self._flags_by_name

    @property
    def flags_by_abbreviation(self):
        return self._flags_by_abbreviation

    def __len__(self):
        return len(self._flags)

    def __repr__(self):
        return f"flag-index(flags={len(self._flags)}, version={self._version!r}, commands={len(self._commands)})"

    def __rich_repr__(self):
        yield "flags", len(self._flags)
        yield "version", self._version
        yield "commands", self._commands

    def slots(self, command, /):
        """
        Slots of the flags applicable to `command`; empty for unknown commands and directives.
        """
        return self._flags_by_command.get(command, ())

    def flags_for(self, command, /):
        return tuple(self._flags[slot] for slot in self.slots(command))

    def lookup(self, name, /):
        """
        Definition registered under a bare canonical or old name, or None.
        """
        try:
            return self._flags[self._flags_by_name[name]]
        except KeyError:
            return None

    def resolve(self, token, /):
        """
        Shortcut for bazelflags.resolver.resolve(self, token).
        """
        return resolve(self, token)


__all__ = (
    "FlagIndex",
    "DIRECTIVES",
)
