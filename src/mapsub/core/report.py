from __future__ import annotations

"""
Per-run substitution report.

``counts`` holds, for every search value in original table order, how many
occurrences phase 1 consumed. Shorter patterns that only matched inside a
longer, already-consumed pattern are not counted.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class SubstitutionReport:
    text: str
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def changed(self) -> bool:
        return self.total > 0

    def unmatched(self) -> List[str]:
        """Search values that never occurred in the payload."""
        return [k for k, n in self.counts.items() if n == 0]

    def summary_lines(self) -> List[str]:
        lines = [f'{n:>6}  {k!r}' for k, n in self.counts.items()]
        lines.append(f'{self.total:>6}  total')
        return lines
