"""
logline.tier0_core.levels
──────────────────────────
Severity levels. Numeric order drives threshold gating in backends; the label
is what ends up in rendered lines (``%<severity>s`` → ``INFO``).
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any


class Level(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    UNKNOWN = 5

    def __str__(self) -> str:
        return self.name

    def __format__(self, spec: str) -> str:
        return format(self.name, spec)

    @classmethod
    def parse(cls, value: Any) -> "Level":
        """
        Resolve a Level from a Level, an int in range, or a case-insensitive
        name. Raises ValueError for anything else.

        Usage:
            Level.parse("warning")  # → Level.WARN
            Level.parse(3)          # → Level.ERROR
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        if isinstance(value, str):
            name = value.strip().lower()
            name = _ALIASES.get(name, name)
            try:
                return cls[name.upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        raise ValueError(f"Unknown log level: {value!r}")

    @classmethod
    def from_stdlib(cls, levelno: int) -> "Level":
        """Map a stdlib ``logging`` level number onto the closest Level."""
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


_ALIASES: dict[str, str] = {
    "warning": "warn",
    "critical": "fatal",
    "exception": "error",
    "any": "unknown",
}

DEFAULT_LEVEL = Level.INFO
