from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class MappingEntry:
    """One intended substitution: every literal *search* becomes *replace*."""
    search: str
    replace: str

    def inverted(self) -> 'MappingEntry':
        return MappingEntry(search=self.replace, replace=self.search)


@dataclass(frozen=True)
class MappingTable:
    """Validated, ordered collection of entries as originally supplied.

    Instances are produced by ``MappingValidator.validate``; building one by
    hand skips the duplicate-key gate.
    """
    entries: Tuple[MappingEntry, ...] = ()

    def __iter__(self) -> Iterator[MappingEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    @property
    def searches(self) -> Tuple[str, ...]:
        return tuple(e.search for e in self.entries)

    @property
    def replacements(self) -> Tuple[str, ...]:
        return tuple(e.replace for e in self.entries)

    def inverted(self) -> 'MappingTable':
        """Return the field-swapped table (replace → search), same order."""
        return MappingTable(tuple(e.inverted() for e in self.entries))
