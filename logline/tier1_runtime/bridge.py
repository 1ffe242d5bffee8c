"""
logline.tier1_runtime.bridge
─────────────────────────────
Adapters that let existing logging setups emit logline lines:

    LineFormatter   stdlib ``logging.Formatter`` for any Handler
    LineRenderer    final structlog processor

Both wrap a Formatter rather than extend it and return the line without its
terminator, since handlers add their own.

Usage:
    handler = logging.StreamHandler()
    handler.setFormatter(LineFormatter(build_formatter(template="%<severity>s %<message>s")))

    structlog.configure(processors=[..., LineRenderer(build_formatter())])
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from logline.tier0_core.levels import Level
from logline.tier1_runtime.clock import get_clock
from logline.tier1_runtime.formatter import NEW_LINE, Formatter


def _strip_terminator(line: str) -> str:
    return line[: -len(NEW_LINE)] if line.endswith(NEW_LINE) else line


class LineFormatter(logging.Formatter):
    """Render stdlib LogRecords through a logline Formatter."""

    def __init__(self, formatter: Formatter | None = None) -> None:
        super().__init__()
        self.line_formatter = formatter or Formatter()

    def format(self, record: logging.LogRecord) -> str:
        message: Any
        if record.exc_info and record.exc_info[1] is not None:
            message = record.exc_info[1]
        elif isinstance(record.msg, Mapping):
            message = record.msg
        else:
            message = record.getMessage()
        line = self.line_formatter.render(
            Level.from_stdlib(record.levelno),
            datetime.fromtimestamp(record.created, tz=timezone.utc),
            record.name,
            message,
        )
        return _strip_terminator(line)


@dataclass(frozen=True)
class LineRenderer:
    """
    structlog renderer. ``level``, ``timestamp`` and ``logger`` become the
    reserved fields; a lone ``event`` becomes the message, otherwise the event
    stays a regular field next to the bound key/values.
    """

    formatter: Formatter

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
        fields = dict(event_dict)
        try:
            severity = Level.parse(fields.pop("level", method_name))
        except ValueError:
            severity = Level.UNKNOWN
        time = fields.pop("timestamp", None) or get_clock().now()
        progname = fields.pop("logger", None)

        message: Any = fields
        if list(fields) == ["event"]:
            message = fields["event"]
        return _strip_terminator(self.formatter.render(severity, time, progname, message))
