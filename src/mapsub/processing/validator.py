import logging
from collections import Counter
from typing import Iterable, List, Optional, Tuple, Union

from mapsub.core.errors import DuplicateReplaceValue, DuplicateSearchKey, EmptySearchKey, InvalidSearchKeys
from mapsub.core.models import MappingEntry, MappingTable
from mapsub.logging.helpers import get_logger

EntryLike = Union[MappingEntry, Tuple[str, str]]


class MappingValidator:
    """Gate between a decoded mapping table and the substitution engine.

    ``validate`` is pure: it either returns a ``MappingTable`` or raises a
    ``ValidationError`` subclass naming every offending value found in a
    single pass. The duplicate-replace pass is opt-in, since forward-only
    use does not need it.
    """

    def __init__(self, *, require_unique_replace: bool = False, logger: Optional[logging.Logger] = None) -> None:
        self._require_unique_replace = bool(require_unique_replace)
        self._log = logger or get_logger('processing.validator')

    @staticmethod
    def _coerce(item: EntryLike) -> MappingEntry:
        if isinstance(item, MappingEntry):
            return item
        search, replace = item
        if not isinstance(search, str) or not isinstance(replace, str):
            raise TypeError(
                f'mapping entries must be pairs of str, got ({type(search).__name__}, {type(replace).__name__})'
            )
        return MappingEntry(search=search, replace=replace)

    @staticmethod
    def _duplicates(values: Iterable[str]) -> List[str]:
        counts = Counter(values)
        return [v for v, n in counts.items() if n > 1]

    def validate(self, entries: Iterable[EntryLike], *, require_unique_replace: Optional[bool] = None) -> MappingTable:
        """Return a validated table or raise.

        Args:
            entries: Ordered ``MappingEntry`` items or ``(search, replace)`` pairs.
            require_unique_replace: Override the instance default for the
                reversibility pass.

        Raises:
            EmptySearchKey: Some entry has an empty search value.
            DuplicateSearchKey: Some search values occur more than once.
            InvalidSearchKeys: Both of the above; it is an instance of each.
            DuplicateReplaceValue: Reversibility was requested and some
                replace values occur more than once.
            TypeError: A pair member is not a ``str``.
        """
        items = tuple(self._coerce(e) for e in entries)

        empty = [i for i, e in enumerate(items) if not e.search]
        dupes = self._duplicates(e.search for e in items if e.search)
        if empty or dupes:
            self._log.debug(
                'rejecting table: %d empty, %d duplicated search value(s)', len(empty), len(dupes)
            )
        if empty and dupes:
            raise InvalidSearchKeys(empty, dupes)
        if empty:
            raise EmptySearchKey(empty)
        if dupes:
            raise DuplicateSearchKey(dupes)

        table = MappingTable(items)
        unique_replace = self._require_unique_replace if require_unique_replace is None else require_unique_replace
        if unique_replace:
            self.check_reversible(table)
        return table

    def check_reversible(self, table: MappingTable) -> MappingTable:
        """Second validation pass: every replace value must be unique."""
        dupes = self._duplicates(table.replacements)
        if dupes:
            self._log.debug('rejecting table: %d duplicated replace value(s)', len(dupes))
            raise DuplicateReplaceValue(dupes)
        return table


def validate(entries: Iterable[EntryLike], *, require_unique_replace: bool = False) -> MappingTable:
    """Module-level shortcut for ``MappingValidator().validate``."""
    return MappingValidator(require_unique_replace=require_unique_replace).validate(entries)
