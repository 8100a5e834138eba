from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from mapsub.core.errors import EmptySearchKey, MappingFormatError, ValidationError
from mapsub.core.models import MappingTable
from mapsub.io.mapping_reader import MappingReader
from mapsub.logging.factory import DefaultLoggerFactory
from mapsub.logging.helpers import get_logger, trace_io
from mapsub.parser import _build_parser
from mapsub.processing.context_finder import ContextFinder
from mapsub.processing.engine import SubstitutionEngine
from mapsub.processing.validator import MappingValidator

EXIT_OK = 0
EXIT_IO = 1
EXIT_INVALID = 2

logger = get_logger('mapsub')


class CliError(Exception):
    """Abort the current command with *code* after logging *message*."""

    def __init__(self, message: str, code: int = EXIT_IO) -> None:
        super().__init__(message)
        self.code = code


def _configure_logging(ns: argparse.Namespace) -> None:
    """Configure process-wide logging from -v/-q/--json-logs."""
    level = logging.DEBUG if ns.verbose else logging.WARNING if ns.quiet else logging.INFO
    factory = DefaultLoggerFactory(json_logs=ns.json_logs, level=level)
    global logger
    logger = factory.get_logger('mapsub')


def _reader(ns: argparse.Namespace) -> MappingReader:
    try:
        return MappingReader(fmt=ns.mapping_format, delimiter=ns.delimiter)
    except ValueError as exc:
        raise CliError(str(exc)) from exc


def _load_table(ns: argparse.Namespace, *, reversible: bool) -> MappingTable:
    path = Path(ns.mapping)
    try:
        entries = _reader(ns).read_path(path)
    except OSError as exc:
        raise CliError(f'cannot read mapping table {path}: {exc.strerror or exc}') from exc
    except MappingFormatError as exc:
        raise CliError(f'invalid mapping table: {exc}') from exc

    try:
        table = MappingValidator(require_unique_replace=reversible).validate(entries)
    except ValidationError as exc:
        _report_invalid(exc, path)
        raise CliError(f'mapping table {path} rejected, nothing was written', EXIT_INVALID) from exc
    logger.debug('mapping table %s: %d entries', path, len(table))
    return table


def _report_invalid(exc: ValidationError, path: Path) -> None:
    logger.error('%s in %s:', exc.kind, path)
    keys = exc.offending_keys
    if isinstance(exc, EmptySearchKey):
        for idx in exc.indexes:
            logger.error('  entry #%d has an empty search value', idx + 1)
        keys = exc.duplicates
    for key in sorted(keys):
        logger.error('  %r', key)


def _read_input(path: Optional[str]) -> str:
    if not path:
        return sys.stdin.read()
    try:
        trace_io(logger, 'reading payload', path=path)
        return Path(path).read_text(encoding='utf-8')
    except OSError as exc:
        raise CliError(f'cannot read {path}: {exc.strerror or exc}') from exc


def _write_output(path: Optional[str], text: str) -> None:
    if not path:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    try:
        trace_io(logger, 'writing payload', path=path, chars=len(text))
        Path(path).write_text(text, encoding='utf-8')
    except OSError as exc:
        raise CliError(f'cannot write {path}: {exc.strerror or exc}') from exc


# --------------------------------------------------------------------------- #
#  Sub-commands                                                               #
# --------------------------------------------------------------------------- #
def _cmd_apply(ns: argparse.Namespace) -> int:
    if ns.in_place and not ns.input:
        raise CliError('--in-place requires --input')

    reversible = ns.reversible or ns.reverse
    table = _load_table(ns, reversible=reversible)
    if ns.reverse:
        try:
            table = MappingValidator().validate(table.inverted())
        except ValidationError as exc:
            _report_invalid(exc, Path(ns.mapping))
            raise CliError('mapping table cannot be inverted, nothing was written', EXIT_INVALID) from exc

    payload = _read_input(ns.input)
    report = SubstitutionEngine().run(table, payload)

    if ns.report:
        for line in report.summary_lines():
            logger.info('%s', line)
    for key in report.unmatched():
        logger.debug('no occurrence of %r', key)

    _write_output(ns.input if ns.in_place else ns.output, report.text)
    return EXIT_OK


def _cmd_check(ns: argparse.Namespace) -> int:
    table = _load_table(ns, reversible=ns.reversible)
    logger.info('✔ %s: %d entries, no conflicts', ns.mapping, len(table))
    return EXIT_OK


def _cmd_contexts(ns: argparse.Namespace) -> int:
    finder = ContextFinder(require_boundary=not ns.any_substring)
    if ns.fragment is not None and not ns.fragment:
        raise CliError('--fragment must not be empty', EXIT_INVALID)
    table = _load_table(ns, reversible=False) if ns.mapping else None
    payload = _read_input(ns.input)

    out: List[str] = []
    if table is None:
        out.extend(finder.find_contexts(ns.fragment, payload))
    else:
        for search, words in finder.survey(table, payload).items():
            out.append(f'{search}:')
            out.extend(f'    {w}' for w in words)
    _write_output(None, ''.join(f'{line}\n' for line in out))
    return EXIT_OK


_COMMANDS = {
    'apply': _cmd_apply,
    'check': _cmd_check,
    'contexts': _cmd_contexts,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    ns = _build_parser().parse_args(list(argv) if argv is not None else None)
    _configure_logging(ns)
    try:
        return _COMMANDS[ns.command](ns)
    except CliError as exc:
        logger.error('%s', exc)
        return exc.code


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
