"""Minimal structured logging helper.

Emits one ``key=value`` line per event with a timestamp and level, or one JSON
object per line when ``UNDERCROFT_LOG_JSON`` is set. The threshold comes from
``UNDERCROFT_LOG_LEVEL`` (debug, info, warn, error; default info) and is read
on every call so a ``.env`` loaded after import still applies.

Usage:
    from undercroft.logging_utils import get_logger
    log = get_logger("undercroft.world")
    log.info(event="world_built", levels=3)

Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _threshold() -> int:
    return LEVELS.get(os.getenv("UNDERCROFT_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("UNDERCROFT_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _format(level: str, **fields) -> str:
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=repr)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str):
        self.name = name

    def _log(self, lvl: str, **fields) -> None:
        if LEVELS[lvl] < _threshold():
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if lvl == "error" else sys.stdout
        print(_format(lvl, **fields), file=stream)

    def debug(self, **fields) -> None:
        self._log("debug", **fields)

    def info(self, **fields) -> None:
        self._log("info", **fields)

    def warn(self, **fields) -> None:
        self._log("warn", **fields)

    def error(self, **fields) -> None:
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("undercroft")
