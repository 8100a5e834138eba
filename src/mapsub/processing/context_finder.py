import logging
import re
from typing import Callable, Dict, Iterator, List, Optional, Pattern

from mapsub.constants import WORD_CHARS
from mapsub.core.models import MappingTable
from mapsub.logging.helpers import get_logger


class ContextMatches:
    """Lazy, restartable view of the contexts of one fragment.

    Each iteration rescans the payload and yields every distinct context in
    order of first appearance. The scan is linear: occurrences are found
    with a zero-width lookahead, each context is grown outwards by index,
    and occurrences inside an already reported context are skipped.
    """

    def __init__(self, occurrences: Pattern[str], size: int, is_word: Callable[[str], object], payload: str) -> None:
        self._occurrences = occurrences
        self._size = size
        self._is_word = is_word
        self._payload = payload

    def __iter__(self) -> Iterator[str]:
        text = self._payload
        seen = set()
        covered = 0
        for m in self._occurrences.finditer(text):
            start = m.start()
            if start < covered:
                continue
            end = start + self._size
            while start > 0 and self._is_word(text[start - 1]):
                start -= 1
            while end < len(text) and self._is_word(text[end]):
                end += 1
            covered = end
            word = text[start:end]
            if word not in seen:
                seen.add(word)
                yield word

    def __repr__(self) -> str:
        return f'ContextMatches({self._occurrences.pattern!r})'


class ContextFinder:
    """Read-only blast-radius diagnostic.

    A context is the maximal run of word characters (letters, digits,
    underscore, hyphen) around an occurrence of a literal fragment. The
    fragment is escaped, so ``.`` or ``*`` match themselves; when it holds
    non-word characters the context extends through it, e.g. ``le.com`` in
    ``example.com`` reports ``example.com``.

    With ``require_boundary`` (the default) an occurrence only counts when
    it ends a word: ``us`` reports ``us-west-1`` and ``brutus`` but not
    ``user``. A hyphen ends a word but stays part of the context.
    """

    def __init__(
        self,
        *,
        word_chars: str = WORD_CHARS,
        require_boundary: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._is_word = re.compile(word_chars).fullmatch
        self._require_boundary = bool(require_boundary)
        self._log = logger or get_logger('processing.contexts')

    def compile(self, fragment: str) -> Pattern[str]:
        """Zero-width pattern matching at the start of every counted occurrence."""
        if not fragment:
            raise ValueError('fragment must be a non-empty string')
        tail = r'(?!\w)' if self._require_boundary and re.match(r'\w', fragment[-1]) else ''
        return re.compile(f'(?={re.escape(fragment)}{tail})')

    def find_contexts(self, fragment: str, payload: str) -> ContextMatches:
        return ContextMatches(self.compile(fragment), len(fragment), self._is_word, payload)

    def survey(self, table: MappingTable, payload: str) -> Dict[str, List[str]]:
        """Map every search value of *table* to its contexts, in table order."""
        out: Dict[str, List[str]] = {}
        for entry in table:
            out[entry.search] = list(self.find_contexts(entry.search, payload))
            self._log.debug('%r: %d context(s)', entry.search, len(out[entry.search]))
        return out


def find_contexts(fragment: str, payload: str) -> ContextMatches:
    """Module-level shortcut for ``ContextFinder().find_contexts``."""
    return ContextFinder().find_contexts(fragment, payload)
