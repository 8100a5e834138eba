from __future__ import annotations
"""Text transformation protocol definitions."""

from typing import Iterable, Mapping, Protocol, runtime_checkable

from mapsub.core.models import MappingEntry, MappingTable
from mapsub.core.report import SubstitutionReport


@runtime_checkable
class MappingValidatorProtocol(Protocol):
    """Protocol for the mapping table gate.

    Implementations are expected to:
      * Reject empty and duplicated search values, reporting all of them.
      * Optionally reject duplicated replace values (reversible use).
    """

    def validate(self, entries: Iterable[MappingEntry]) -> MappingTable:
        ...

    def check_reversible(self, table: MappingTable) -> MappingTable:
        ...


@runtime_checkable
class SubstitutionEngineProtocol(Protocol):
    """Protocol for multi-pattern literal substitution over a validated table."""

    def apply(self, table: MappingTable, payload: str) -> str:
        ...

    def run(self, table: MappingTable, payload: str) -> SubstitutionReport:
        ...


@runtime_checkable
class ContextFinderProtocol(Protocol):
    """Protocol for the read-only blast-radius diagnostic."""

    def find_contexts(self, fragment: str, payload: str) -> Iterable[str]:
        ...

    def survey(self, table: MappingTable, payload: str) -> Mapping[str, list[str]]:
        ...
