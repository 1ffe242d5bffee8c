"""
logline.tier0_core.logging
───────────────────────────
logline's own diagnostics: structured logs with levels, context injection and
redaction. This is the channel the package uses to report on itself (built
formatters, backends); rendered log lines never pass through it.

The processor chain is bound to logline's loggers with structlog.wrap_logger.
The process-wide structlog configuration belongs to the host application and
is never touched here.

Minimal stack: structlog + stdlib StreamHandler on stderr
Configure via: LOGLINE_LOG_LEVEL, LOGLINE_LOG_FORMAT=json|console|line
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from logline.tier0_core.config import LoglineConfig, get_config
from logline.tier0_core.redact import structlog_redact_processor

_LINE_TEMPLATE = "%<time>s %<severity>-5s %<progname>s: %<message>s"


# ── Configuration ─────────────────────────────────────────────────────────────

def _build_renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    if log_format == "line":
        from logline.tier1_runtime.bridge import LineRenderer
        from logline.tier1_runtime.formatter import Formatter

        return LineRenderer(Formatter(template=_LINE_TEMPLATE))
    return structlog.processors.JSONRenderer()


def _build_processors(config: LoglineConfig) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog_redact_processor,
        _build_renderer(config.log_format),
    ]


def _configure_package_logger(log_level: int) -> None:
    package_logger = logging.getLogger("logline")
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    package_logger.propagate = False


# ── Public API ────────────────────────────────────────────────────────────────

_pipeline: tuple[list[Any], Any] | None = None


def get_logger(name: str | None = None) -> Any:
    """
    Return a structured logger for logline's own diagnostics.

    Usage:
        log = get_logger(__name__)
        log.debug("formatter.built", template="%<message>s", filter="NullFilter")
    """
    global _pipeline
    if _pipeline is None:
        config = get_config()
        log_level = getattr(logging, config.log_level, logging.WARNING)
        _configure_package_logger(log_level)
        _pipeline = (
            _build_processors(config),
            structlog.make_filtering_bound_logger(log_level),
        )
    processors, wrapper_class = _pipeline
    return structlog.wrap_logger(
        logging.getLogger(name or "logline"),
        processors=processors,
        wrapper_class=wrapper_class,
        context_class=dict,
    )


def bind_context(**kwargs: Any) -> None:
    """
    Bind key-value pairs to the current async/thread context.
    All subsequent diagnostics in this context will include these fields.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context-bound log fields."""
    structlog.contextvars.clear_contextvars()
