from __future__ import annotations
"""Decoders for serialized mapping tables.

Supported formats
-----------------
lines   ``search=replace`` per line, split on the first delimiter. Blank lines
        and ``#`` comments are skipped. Both sides are taken verbatim.
tsv/csv Two columns; an optional ``search,replace`` header row is skipped.
json    ``{"search": "replace", ...}`` or a list of ``{"search", "replace"}``
        objects or ``[search, replace]`` pairs. Repeated object keys are kept
        as separate entries so validation can report them.

Decoding never validates: duplicates and empty search values are left for
``MappingValidator``.
"""
import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from mapsub.constants import COMMENT_PREFIX, DEFAULT_LINE_DELIMITER, MAPPING_FORMATS
from mapsub.core.errors import MappingFormatError
from mapsub.core.models import MappingEntry
from mapsub.logging.helpers import get_logger, trace_io

_SUFFIX_FORMATS = {'.json': 'json', '.tsv': 'tsv', '.csv': 'csv'}
_HEADER = ('search', 'replace')


class _Pairs(list):
    """Decoded JSON object with its key order and repeated keys intact."""


def guess_format(path: Path) -> str:
    return _SUFFIX_FORMATS.get(path.suffix.lower(), 'lines')


class MappingReader:
    def __init__(
        self,
        *,
        fmt: Optional[str] = None,
        delimiter: str = DEFAULT_LINE_DELIMITER,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Create a reader; *fmt* ``None`` means guess from the file suffix."""
        if fmt is not None and fmt not in MAPPING_FORMATS:
            raise ValueError(f'unknown mapping format {fmt!r} (expected one of {", ".join(MAPPING_FORMATS)})')
        if not delimiter:
            raise ValueError('delimiter must be a non-empty string')
        self._fmt = fmt
        self._delim = delimiter
        self._log = logger or get_logger('io.mapping')

    # ------------------------------------------------------------------ #
    #  Public API                                                         #
    # ------------------------------------------------------------------ #
    def read_path(self, path: Path) -> List[MappingEntry]:
        path = Path(path)
        fmt = self._fmt or guess_format(path)
        trace_io(self._log, 'reading mapping table', path=str(path), fmt=fmt)
        text = path.read_text(encoding='utf-8')
        return self._decode(text, fmt, str(path))

    def read_text(self, text: str, *, source: str = '<string>') -> List[MappingEntry]:
        return self._decode(text, self._fmt or 'lines', source)

    # ------------------------------------------------------------------ #
    #  Decoders                                                           #
    # ------------------------------------------------------------------ #
    def _decode(self, text: str, fmt: str, source: str) -> List[MappingEntry]:
        if text.startswith('\ufeff'):
            text = text[1:]
        if fmt == 'lines':
            entries = self._decode_lines(text, source)
        elif fmt in ('tsv', 'csv'):
            entries = self._decode_columns(text, '\t' if fmt == 'tsv' else ',', source)
        else:
            entries = self._decode_json(text, source)
        self._log.debug('decoded %d mapping entr%s from %s', len(entries),
                        'y' if len(entries) == 1 else 'ies', source)
        return entries

    def _decode_lines(self, text: str, source: str) -> List[MappingEntry]:
        entries: List[MappingEntry] = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith(COMMENT_PREFIX):
                continue
            if self._delim not in line:
                raise MappingFormatError(f'expected SEARCH{self._delim}REPLACE, got {line!r}',
                                         source=source, lineno=lineno)
            search, replace = line.split(self._delim, 1)
            entries.append(MappingEntry(search=search, replace=replace))
        return entries

    def _decode_columns(self, text: str, delimiter: str, source: str) -> List[MappingEntry]:
        entries: List[MappingEntry] = []
        reader = csv.reader(io.StringIO(text, newline=''), delimiter=delimiter)
        first = True
        try:
            for row in reader:
                if not row:
                    continue
                if first:
                    first = False
                    if tuple(c.strip().lower() for c in row) == _HEADER:
                        continue
                if len(row) != 2:
                    raise MappingFormatError(f'expected 2 columns, got {len(row)}',
                                             source=source, lineno=reader.line_num)
                entries.append(MappingEntry(search=row[0], replace=row[1]))
        except csv.Error as exc:
            raise MappingFormatError(str(exc), source=source, lineno=reader.line_num) from exc
        return entries

    def _decode_json(self, text: str, source: str) -> List[MappingEntry]:
        try:
            data = json.loads(text, object_pairs_hook=_Pairs)
        except json.JSONDecodeError as exc:
            raise MappingFormatError(exc.msg, source=source, lineno=exc.lineno) from exc

        if isinstance(data, _Pairs):
            return [self._entry(k, v, source) for k, v in data]
        if not isinstance(data, list):
            raise MappingFormatError('top-level JSON value must be an object or a list', source=source)

        entries: List[MappingEntry] = []
        for idx, item in enumerate(data):
            if isinstance(item, _Pairs):
                fields = dict(item)
                if set(fields) != set(_HEADER):
                    raise MappingFormatError(f'item {idx}: expected keys "search" and "replace"', source=source)
                entries.append(self._entry(fields['search'], fields['replace'], source))
            elif isinstance(item, list) and len(item) == 2:
                entries.append(self._entry(item[0], item[1], source))
            else:
                raise MappingFormatError(f'item {idx}: expected an object or a [search, replace] pair',
                                         source=source)
        return entries

    @staticmethod
    def _entry(search: Any, replace: Any, source: str) -> MappingEntry:
        if not isinstance(search, str) or not isinstance(replace, str):
            raise MappingFormatError(f'search and replace must be strings, got {search!r}: {replace!r}',
                                     source=source)
        return MappingEntry(search=search, replace=replace)
