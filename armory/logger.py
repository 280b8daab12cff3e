"""Leveled logging for the firing core.

Every subsystem grabs a named channel via ``get_logger("weapon")`` and writes
``[HH:MM:SS] LEVEL channel: message`` lines. The minimum level comes from the
``ARMORY_LOG_LEVEL`` environment variable (DEBUG, INFO, WARN, ERROR) and is
read once at import time.

Logging is an observability hook only: a broken or missing stream must never
raise back into the weapon or projectile state machines.
"""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass
from typing import TextIO

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_DEFAULT_LEVEL_NAME = os.environ.get("ARMORY_LOG_LEVEL", "INFO").upper()
_MIN_LEVEL = _LEVELS.get(_DEFAULT_LEVEL_NAME, 20)


@dataclass
class Logger:
    name: str
    stream: TextIO | None = sys.stdout
    min_level: int | None = None

    def enabled(self, level: str) -> bool:
        threshold = _MIN_LEVEL if self.min_level is None else self.min_level
        return _LEVELS[level] >= threshold

    def _log(self, level: str, *parts):
        if not self.enabled(level):
            return
        if self.stream is None:
            return
        ts = time.strftime("%H:%M:%S")
        msg = " ".join(str(p) for p in parts)
        line = f"[{ts}] {level:<5} {self.name}: {msg}\n"
        try:
            self.stream.write(line)
            self.stream.flush()
        except Exception:
            # Closed or detached streams (pythonw, captured test output).
            return

    def debug(self, *parts):
        self._log("DEBUG", *parts)

    def info(self, *parts):
        self._log("INFO", *parts)

    def warn(self, *parts):
        self._log("WARN", *parts)

    def error(self, *parts):
        self._log("ERROR", *parts)


def get_logger(name: str = "armory") -> Logger:
    return Logger(name)


__all__ = ["get_logger", "Logger"]
