"""Structured JSON logger for vaizify.

Each record is written as one JSON object per line::

    {"ts": "2026-10-19T08:30:00.000000+00:00", "level": "INFO",
     "logger": "vaizify.client", "message": "replace_json_document complete",
     "op": "replace_json_document", "document_id": "66f1...", "nodes": 12}

Structured fields go through :func:`~vaizify.utils.redact.redact` before
they are written, so a bearer header or a ``token`` field passed by
mistake never reaches the log stream.

The level of every vaizify logger defaults to ``VAIZ_LOG_LEVEL`` (or
``INFO`` when unset).

Usage::

    from vaizify.observability import get_logger, log_fields

    log = get_logger("vaizify.client")
    log.info("document replaced", extra=log_fields(document_id="66f1"))
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from vaizify.utils.redact import redact

LOG_LEVEL_ENV = "VAIZ_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

_RESERVED_KEYS = frozenset({"ts", "level", "logger", "message"})


class StructuredFormatter(logging.Formatter):
    """Render a log record as a single-line JSON object.

    Always-present keys: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Redacted ``extra_fields`` are merged into the top level;
    a field that would shadow one of the fixed keys is written as
    ``field_<name>`` instead.  ``exception`` and ``stack_info`` are added
    when the record carries them.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        for key, value in redact(extra_fields or {}).items():
            entry[f"field_{key}" if key in _RESERVED_KEYS else key] = value

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def log_fields(**fields: Any) -> dict[str, Any]:
    """Wrap keyword fields in the ``extra`` mapping the formatter reads."""
    return {"extra_fields": fields}


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


_configured_loggers: set[str] = set()


def get_logger(
    name: str = "vaizify",
    *,
    level: int | str | None = None,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Modules use dotted children such as
        ``"vaizify.transport"``.
    level:
        Minimum level, as an ``int`` or a case-insensitive name.  ``None``
        reads ``VAIZ_LOG_LEVEL``.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Only the first call for a given *name* installs a handler and sets the
    level; later calls return the same logger untouched.

    Raises
    ------
    ValueError
        If *level* names no logging level.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        logger.setLevel(_resolve_level(level))

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
