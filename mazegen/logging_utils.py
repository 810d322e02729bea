"""Structured logging for mazegen.

Records are ordinary stdlib ``logging`` records under the ``mazegen`` logger
tree carrying a ``fields`` dict, so every handler the process installs (the
server's rotating file, pytest's caplog) receives them. ``StructuredFormatter``
renders the fields as key=value pairs, or one JSON object per line when
MAZEGEN_LOG_JSON is enabled. A console handler on the ``mazegen`` logger
prints them to stdout (errors to stderr) without any further setup.

Usage:
    from mazegen.logging_utils import log
    log.info(event="startup", host="127.0.0.1", port=5000)
    log.generation(seed=42, width=64, height=36, **dungeon.metrics)
"""

from __future__ import annotations

import json
import logging
import os
import sys

ROOT_LOGGER = "mazegen"
LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}
_LEVEL_NAMES = {v: k for k, v in LEVELS.items()}
JSON_MODE = os.getenv("MAZEGEN_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")

# Shape of an event=dungeon_generated record: field -> type it is coerced to.
GENERATION_FIELDS = {
    "seed": int,
    "width": int,
    "height": int,
    "rooms_placed": int,
    "maze_regions": int,
    "regions_total": int,
    "connectors_opened": int,
    "loops_opened": int,
    "dead_ends_removed": int,
    "floor_tiles": int,
    "runtime_ms": int,
}


class StructuredFormatter(logging.Formatter):
    """key=value (or JSON) rendering of a record's ``fields``.

    Records from plain ``logger.warning("...")`` calls have no fields; their
    message is emitted as ``msg``.
    """

    def format(self, record: logging.LogRecord) -> str:
        fields = getattr(record, "fields", None)
        if fields is None:
            fields = {"msg": record.getMessage()}
        level = _LEVEL_NAMES.get(record.levelno, record.levelname.lower())
        ts = int(record.created)
        if JSON_MODE:
            rec = {k: v for k, v in fields.items() if v is not None}
            rec.update(level=level, ts=ts, logger=record.name)
            return json.dumps(rec, separators=(",", ":"), default=str)
        parts = [f"level={level}", f"ts={ts}"]
        for k, v in fields.items():
            if v is None:
                continue
            if isinstance(v, (int, float)):
                parts.append(f"{k}={v}")
            else:
                parts.append(f"{k}={str(v).replace(' ', '_')}")
        parts.append(f"logger={record.name}")
        return " ".join(parts)


class ConsoleHandler(logging.Handler):
    """Errors to stderr, everything else to stdout; streams looked up per record."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = sys.stderr if record.levelno >= logging.ERROR else sys.stdout
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def set_level(name: str) -> None:
    """Set the threshold for the whole mazegen tree ('debug', 'info', 'warn', 'error')."""
    logging.getLogger(ROOT_LOGGER).setLevel(LEVELS.get(name.lower(), logging.INFO))


def _install_console_handler() -> None:
    root = logging.getLogger(ROOT_LOGGER)
    if any(isinstance(h, ConsoleHandler) for h in root.handlers):
        return
    handler = ConsoleHandler()
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
    set_level(os.getenv("MAZEGEN_LOG_LEVEL", "info"))


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or ROOT_LOGGER
        self._logger = logging.getLogger(self.name)

    def _log(self, lvl: str, **fields):
        levelno = LEVELS[lvl]
        if not self._logger.isEnabledFor(levelno):
            return
        self._logger.log(levelno, fields.get("event", ""), extra={"fields": fields})

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)

    def generation(self, level: str = "debug", **values):
        """Emit an event=dungeon_generated record.

        Only GENERATION_FIELDS are kept, each coerced to its declared type, so
        callers can pass a whole metrics dict.
        """
        fields = {"event": "dungeon_generated"}
        for key, kind in GENERATION_FIELDS.items():
            if values.get(key) is not None:
                fields[key] = kind(values[key])
        self._log(level, **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


_install_console_handler()
log = get_logger(ROOT_LOGGER)
