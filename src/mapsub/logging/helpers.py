from __future__ import annotations

"""Logger naming, handler setup and IO tracing for mapsub.

Library code only ever calls ``get_logger``; installing a handler on the
``mapsub`` logger is left to the CLI (``setup_base_logger``).
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

BASE_LOGGER = "mapsub"
PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_IO_ENV = "MAPSUB_TRACE_IO"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``module``, ``msg``,
    ``version`` and, when the record carries a non-empty ``context`` dict,
    ``ctx``.
    """

    def __init__(self) -> None:
        super().__init__()
        # Deferred: mapsub/__init__ imports this module indirectly.
        from mapsub import __version__

        self._version = __version__

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx
        return json.dumps(payload, ensure_ascii=False)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """(Re)configure the ``mapsub`` logger with a single stream handler.

    Any handler from an earlier call is dropped, so the CLI can switch
    between plain and JSON output within one process.
    """
    base = logging.getLogger(BASE_LOGGER)
    for h in list(base.handlers):
        base.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonLogFormatter() if json_logs else logging.Formatter(PLAIN_FORMAT))
    base.addHandler(handler)
    base.setLevel(level)
    base.propagate = False
    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``mapsub`` or a child of it; already-qualified names pass through."""
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER}.{name}")


def is_trace_io_enabled() -> bool:
    return os.getenv(TRACE_IO_ENV) == "1"


def trace_io(logger: logging.Logger, message: str, **ctx) -> None:
    """Debug-log a read or write when ``MAPSUB_TRACE_IO=1``.

    Keyword arguments become the JSON ``ctx`` field.
    """
    if not is_trace_io_enabled():
        return
    if ctx:
        logger.debug("%s | ctx=%r", message, ctx, extra={"context": ctx})
    else:
        logger.debug("%s", message)
