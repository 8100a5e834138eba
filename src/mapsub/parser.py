# mapsub/parser.py
from __future__ import annotations

import argparse
import os

from mapsub.constants import DEFAULT_LINE_DELIMITER, MAPPING_FORMATS


def _env_flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() in {'1', 'true', 'yes', 'on'}


def _common_options() -> argparse.ArgumentParser:
    """Options shared by every sub-command (mapping table and logging)."""
    p = argparse.ArgumentParser(add_help=False)

    g_map = p.add_argument_group("Mapping table")
    g_log = p.add_argument_group("Logging")

    g_map.add_argument(
        "--format",
        dest="mapping_format",
        choices=MAPPING_FORMATS,
        default=os.getenv("MAPSUB_MAPPING_FORMAT") or None,
        help=(
            "Serialization of the mapping table. Defaults to $MAPSUB_MAPPING_FORMAT, "
            "otherwise guessed from the file suffix (.json, .tsv, .csv, anything "
            "else is 'lines')."
        ),
    )
    g_map.add_argument(
        "--delimiter",
        metavar="SEP",
        default=DEFAULT_LINE_DELIMITER,
        help="Separator between SEARCH and REPLACE in the 'lines' format (default '%(default)s').",
    )

    g_log.add_argument(
        "--json-logs",
        action="store_true",
        default=_env_flag("MAPSUB_JSON_LOGS"),
        help="Emit logs as JSON lines on stderr (also $MAPSUB_JSON_LOGS=1).",
    )
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug-level logging.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors.")
    return p


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Sub-commands:
        apply     validate a mapping table and rewrite text with it
        check     validate a mapping table only
        contexts  report the words a fragment (or every search value) touches
    """
    common = _common_options()
    p = argparse.ArgumentParser(
        prog="mapsub",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "mapsub – collision-safe multi-pattern literal substitution\n"
            "Longer search values win over the shorter ones they contain, and\n"
            "swapped pairs (A=B, B=A) swap instead of collapsing."
        ),
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # -----------------------
    # apply
    # -----------------------
    p_apply = sub.add_parser("apply", parents=[common], help="Rewrite text with a mapping table.")
    p_apply.add_argument("-m", "--mapping", metavar="FILE", required=True, help="Mapping table file.")
    p_apply.add_argument("-i", "--input", metavar="FILE", help="Text to rewrite (stdin when omitted).")
    dest = p_apply.add_mutually_exclusive_group()
    dest.add_argument("-o", "--output", metavar="FILE", help="Write the result here (stdout when omitted).")
    dest.add_argument(
        "--in-place",
        action="store_true",
        help="Overwrite --input, only after the whole rewrite succeeded.",
    )
    p_apply.add_argument(
        "--reverse",
        action="store_true",
        help="Apply the inverted table (REPLACE → SEARCH). Implies --reversible.",
    )
    p_apply.add_argument(
        "--reversible",
        action="store_true",
        help="Also reject duplicated REPLACE values, so the run can be undone with --reverse.",
    )
    p_apply.add_argument("--report", action="store_true", help="Log how many occurrences each entry consumed.")

    # -----------------------
    # check
    # -----------------------
    p_check = sub.add_parser("check", parents=[common], help="Validate a mapping table without touching text.")
    p_check.add_argument("-m", "--mapping", metavar="FILE", required=True, help="Mapping table file.")
    p_check.add_argument("--reversible", action="store_true", help="Also reject duplicated REPLACE values.")

    # -----------------------
    # contexts
    # -----------------------
    p_ctx = sub.add_parser(
        "contexts",
        parents=[common],
        help="List the words containing a fragment, to gauge a pattern's blast radius.",
    )
    what = p_ctx.add_mutually_exclusive_group(required=True)
    what.add_argument("-f", "--fragment", help="Literal fragment to look for.")
    what.add_argument("-m", "--mapping", metavar="FILE", help="Survey every search value of this table.")
    p_ctx.add_argument("-i", "--input", metavar="FILE", help="Text to inspect (stdin when omitted).")
    p_ctx.add_argument(
        "--any-substring",
        action="store_true",
        help="Count occurrences that do not end a word too (e.g. 'us' inside 'user').",
    )

    return p
