"""
logline.tier1_runtime.stream
─────────────────────────────
Stream backend: writes rendered lines to any object with a ``write(str)``
method (sys.stdout, an open file, io.StringIO). The severity threshold is the
only admission check; entries below it are neither formatted nor written.

The backend never buffers, flushes or closes the stream; that stays with
whoever opened it.

Configure via: LOGLINE_LEVEL, LOGLINE_PROGNAME (see backend_from_config)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from logline.tier0_core.config import LoglineConfig, get_config
from logline.tier0_core.levels import DEFAULT_LEVEL, Level
from logline.tier0_core.logging import get_logger
from logline.tier1_runtime.clock import Clock, get_clock
from logline.tier1_runtime.formatter import Formatter, formatter_from_config


class Writable(Protocol):
    def write(self, text: str) -> Any: ...


@dataclass(frozen=True)
class StreamBackend:
    stream: Writable
    formatter: Formatter
    level: Level = DEFAULT_LEVEL
    progname: str | None = None
    clock: Clock | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", Level.parse(self.level))

    def enabled_for(self, severity: Level | str | int) -> bool:
        return Level.parse(severity) >= self.level

    def log(
        self,
        severity: Level | str | int,
        message: Any,
        progname: str | None = None,
    ) -> bool:
        """
        Format and write one entry. Returns False when the entry is below the
        threshold, True once the line has been written.
        """
        severity = Level.parse(severity)
        if severity < self.level:
            return False
        clock = self.clock or get_clock()
        line = self.formatter.render(
            severity, clock.now(), progname if progname is not None else self.progname, message
        )
        self.stream.write(line)
        return True

    def debug(self, message: Any, progname: str | None = None) -> bool:
        return self.log(Level.DEBUG, message, progname)

    def info(self, message: Any, progname: str | None = None) -> bool:
        return self.log(Level.INFO, message, progname)

    def warn(self, message: Any, progname: str | None = None) -> bool:
        return self.log(Level.WARN, message, progname)

    def error(self, message: Any, progname: str | None = None) -> bool:
        return self.log(Level.ERROR, message, progname)

    def fatal(self, message: Any, progname: str | None = None) -> bool:
        return self.log(Level.FATAL, message, progname)

    def unknown(self, message: Any, progname: str | None = None) -> bool:
        return self.log(Level.UNKNOWN, message, progname)


def backend_from_config(
    stream: Writable,
    config: LoglineConfig | None = None,
    formatter: Formatter | None = None,
) -> StreamBackend:
    """
    Build a StreamBackend for *stream* from LOGLINE_* settings. The formatter
    is built from the same config unless one is passed in.
    """
    config = config or get_config()
    backend = StreamBackend(
        stream=stream,
        formatter=formatter or formatter_from_config(config),
        level=config.severity,
        progname=config.progname,
    )
    get_logger(__name__).debug(
        "backend.built", level=str(backend.level), progname=backend.progname
    )
    return backend
