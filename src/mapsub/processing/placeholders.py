"""
placeholders – per-run intermediate tokens for two-phase substitution.

A token is ``OPEN + digits + CLOSE`` where OPEN, CLOSE and the digit
alphabet are code points that occur in none of the run's inputs (payload,
search values, replace values). Consequences, for any run:

  • no search value can match text that overlaps a token;
  • no replace value can introduce or complete a token;
  • tokens are pairwise distinct and self-delimiting, so replacing one
    never touches another.

Code points are taken from the Unicode private-use areas. Every call builds
its own alphabet; nothing is shared between runs.
"""

from typing import Iterable, Iterator, List, Sequence, Set, Tuple

from mapsub.constants import PLACEHOLDER_POOLS, PLACEHOLDER_RADIX
from mapsub.core.errors import PlaceholderExhausted


class PlaceholderFactory:
    def __init__(
        self,
        *,
        pools: Sequence[Tuple[int, int]] = PLACEHOLDER_POOLS,
        radix: int = PLACEHOLDER_RADIX,
    ) -> None:
        if radix < 2:
            raise ValueError('radix must be >= 2')
        self._pools = tuple(pools)
        self._radix = radix

    def _free_code_points(self, used: Set[str]) -> Iterator[str]:
        for lo, hi in self._pools:
            for cp in range(lo, hi + 1):
                ch = chr(cp)
                if ch not in used:
                    yield ch

    def _alphabet(self, texts: Iterable[str]) -> Tuple[str, str, str]:
        used: Set[str] = set()
        for t in texts:
            used.update(t)
        free = self._free_code_points(used)
        picked = ''.join(ch for ch, _ in zip(free, range(self._radix + 2)))
        if len(picked) < self._radix + 2:
            raise PlaceholderExhausted(
                f'need {self._radix + 2} unused private-use code points, found {len(picked)}'
            )
        return picked[0], picked[1], picked[2:]

    @staticmethod
    def _encode(n: int, digits: str) -> str:
        radix = len(digits)
        out: List[str] = []
        while True:
            n, r = divmod(n, radix)
            out.append(digits[r])
            if n == 0:
                break
        return ''.join(reversed(out))

    def generate(self, count: int, texts: Iterable[str]) -> List[str]:
        """Return *count* distinct tokens disjoint from every string in *texts*."""
        opener, closer, digits = self._alphabet(texts)
        return [f'{opener}{self._encode(i, digits)}{closer}' for i in range(count)]
