import logging
from typing import Dict, List, Optional, Sequence

from mapsub.core.models import MappingEntry, MappingTable
from mapsub.core.report import SubstitutionReport
from mapsub.logging.helpers import get_logger
from mapsub.processing.placeholders import PlaceholderFactory


def build_plan(table: MappingTable) -> List[MappingEntry]:
    """Order entries longest search first; equal lengths keep table order."""
    return sorted(table.entries, key=lambda e: len(e.search), reverse=True)


class SubstitutionEngine:
    """Two-phase literal substitution driven by a validated ``MappingTable``.

    Phase 1 walks the plan (longest search first) and turns every
    non-overlapping occurrence of each search value into that entry's
    placeholder, each step working on the previous step's output. Phase 2
    turns placeholders into replace values. Because no replace value is
    written until every search has run, and placeholders share no code
    point with any search value, a replace value can never be re-matched:
    ``A→B`` together with ``B→A`` swaps instead of collapsing.

    The engine keeps no state between calls; each run gets fresh tokens.
    """

    def __init__(
        self,
        *,
        placeholders: Optional[PlaceholderFactory] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._placeholders = placeholders or PlaceholderFactory()
        self._log = logger or get_logger('processing.engine')

    def run(self, table: MappingTable, payload: str) -> SubstitutionReport:
        counts: Dict[str, int] = {e.search: 0 for e in table}
        if not table or not payload:
            return SubstitutionReport(text=payload, counts=counts)

        plan = build_plan(table)
        tokens = self._placeholders.generate(
            len(plan),
            [payload, *table.searches, *table.replacements],
        )
        self._log.debug('substitution plan: %d entries, longest search %d chars',
                        len(plan), len(plan[0].search))

        text = payload
        for entry, token in zip(plan, tokens):
            n = text.count(entry.search)
            if n:
                text = text.replace(entry.search, token)
                counts[entry.search] = n

        for entry, token in zip(plan, tokens):
            if counts[entry.search]:
                text = text.replace(token, entry.replace)

        return SubstitutionReport(text=text, counts=counts)

    def apply(self, table: MappingTable, payload: str) -> str:
        return self.run(table, payload).text

    def apply_many(self, table: MappingTable, payloads: Sequence[str]) -> List[str]:
        """Apply *table* to independent payloads; every payload gets its own run."""
        return [self.run(table, p).text for p in payloads]


def apply(table: MappingTable, payload: str) -> str:
    """Module-level shortcut for ``SubstitutionEngine().apply``."""
    return SubstitutionEngine().apply(table, payload)
