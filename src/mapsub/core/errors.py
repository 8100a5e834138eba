from __future__ import annotations

"""Exception hierarchy for mapsub.

Validation errors subclass ``ValueError`` so callers that only care about
"bad input" can catch the builtin.
"""

from typing import Iterable, Optional, Sequence


class MapsubError(Exception):
    """Root of every error raised by mapsub."""


class ValidationError(MapsubError, ValueError):
    """A mapping table was rejected before any text was touched."""

    kind = 'ValidationError'

    def __init__(self, offending_keys: Iterable[str], message: Optional[str] = None) -> None:
        self.offending_keys: frozenset[str] = frozenset(offending_keys)
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        listed = ', '.join(repr(k) for k in sorted(self.offending_keys))
        return f'{self.kind}: {listed}'


class EmptySearchKey(ValidationError):
    """One or more entries have an empty ``search`` value.

    ``duplicates`` holds any repeated non-empty search values found in the
    same pass; it is only populated on ``InvalidSearchKeys``.
    """

    kind = 'EmptySearchKey'

    def __init__(self, indexes: Sequence[int], duplicates: Iterable[str] = ()) -> None:
        self.indexes: tuple[int, ...] = tuple(indexes)
        self.duplicates: frozenset[str] = frozenset(duplicates)
        positions = ', '.join(str(i) for i in self.indexes)
        message = f'{self.kind}: empty search value at entry {positions}'
        if self.duplicates:
            message += '; duplicated: ' + ', '.join(repr(k) for k in sorted(self.duplicates))
        super().__init__({''} | self.duplicates, message)


class DuplicateSearchKey(ValidationError):
    """Two or more entries share a ``search`` value."""

    kind = 'DuplicateSearchKey'


class InvalidSearchKeys(EmptySearchKey, DuplicateSearchKey):
    """A table with both empty and duplicated search values."""

    kind = 'EmptySearchKey+DuplicateSearchKey'


class DuplicateReplaceValue(ValidationError):
    """Two or more entries share a ``replace`` value (reversible mode only)."""

    kind = 'DuplicateReplaceValue'


class MappingFormatError(MapsubError, ValueError):
    """A serialized mapping table could not be decoded."""

    def __init__(self, message: str, *, source: str = '<string>', lineno: Optional[int] = None) -> None:
        self.source = source
        self.lineno = lineno
        where = f'{source}:{lineno}' if lineno is not None else source
        super().__init__(f'{where}: {message}')


class PlaceholderExhausted(MapsubError, RuntimeError):
    """No code points are left that are absent from every input."""
