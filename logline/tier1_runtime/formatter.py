"""
logline.tier1_runtime.formatter
────────────────────────────────
Renders one log call into one terminated text line.

    render(severity, time, progname, message) → "…\n"

The payload is normalised, structured payloads go through the configured
filter, the reserved metadata fields are merged in, and one of four branches
produces the line body:

    error    "<error>: <message>" plus one "from <frame>" line per frame
    params   values of the user fields joined by a space
    message  the whole entry handed to the template as-is
    fields   key=repr(value) pairs joined by ","

Formatters are frozen: filter and template are fixed when they are built.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping

from logline.tier0_core.config import DEFAULT_TEMPLATE, LoglineConfig, get_config
from logline.tier0_core.errors import ConfigurationError
from logline.tier0_core.levels import Level
from logline.tier0_core.logging import get_logger
from logline.tier0_core.redact import Filter, NullFilter, build_filter
from logline.tier1_runtime.message import StructuredPayload, normalize
from logline.tier1_runtime.template import Template, to_text

SEPARATOR = " "
HASH_SEPARATOR = ","
NEW_LINE = "\n"
RESERVED_KEYS = ("progname", "severity", "time")


@dataclass(frozen=True)
class Formatter:
    filter: Filter = field(default_factory=NullFilter)
    template: Template = field(default_factory=Template)

    def __post_init__(self) -> None:
        if isinstance(self.template, str):
            object.__setattr__(self, "template", Template(self.template))

    def __call__(
        self, severity: Level, time: datetime, progname: str | None, message: Any
    ) -> str:
        return self.render(severity, time, progname, message)

    def render(
        self, severity: Level, time: datetime, progname: str | None, message: Any
    ) -> str:
        """Render one log call as a single line ending in NEW_LINE."""
        entry = self.entry(severity, time, progname, message)
        return f"{self._format(entry)}{NEW_LINE}"

    def entry(
        self, severity: Level, time: datetime, progname: str | None, message: Any
    ) -> dict[str, Any]:
        """
        Build the field mapping a line is rendered from. Only structured
        payloads are filtered; the reserved fields always carry the call's
        metadata, whatever the payload said.
        """
        payload = normalize(message)
        if isinstance(payload, StructuredPayload):
            fields = dict(self.filter.apply(payload.fields))
        else:
            fields = payload.to_fields()
        fields.update(progname=progname, severity=severity, time=time)
        return fields

    def _format(self, entry: dict[str, Any]) -> str:
        if "error" in entry:
            return self.template.substitute(_with_message(entry, _format_error(entry)))
        if "params" in entry:
            body = SEPARATOR.join(
                to_text(value) for key, value in _user_fields(entry) if key != "params"
            )
            return self.template.substitute(_with_message(entry, body))
        if "message" in entry:
            return self.template.substitute(entry)
        body = HASH_SEPARATOR.join(f"{key}={value!r}" for key, value in _user_fields(entry))
        return self.template.substitute(_with_message(entry, body))


def _format_error(entry: Mapping[str, Any]) -> str:
    error = entry.get("error")
    if isinstance(error, type):
        error = error.__name__
    head = ": ".join(
        to_text(part) for part in (error, entry.get("message")) if part is not None
    )
    frames = entry.get("backtrace") or ()
    return NEW_LINE.join([head, *(f"from {frame}" for frame in frames)])


def _user_fields(entry: Mapping[str, Any]) -> list[tuple[str, Any]]:
    return [(key, value) for key, value in entry.items() if key not in RESERVED_KEYS]


def _with_message(entry: Mapping[str, Any], message: str) -> dict[str, Any]:
    fields = {key: entry[key] for key in RESERVED_KEYS}
    fields["message"] = message
    return fields


# ── Factories ───────────────────────────────────────────────────────────────

def build_formatter(
    filters: Iterable[str] = (),
    template: str = DEFAULT_TEMPLATE,
    *,
    filter: Filter | None = None,
) -> Formatter:
    """
    Build a Formatter from an ordered sequence of redaction rules and a
    template. Pass *filter* to use a ready-made Filter instead of rules.

    Usage:
        fmt = build_formatter(["password", "user.ssn"], "[%<severity>s] %<message>s")
        fmt.render(Level.INFO, datetime.now(timezone.utc), "api", {"user": "bob", "password": "x"})
        # → "[INFO] user='bob',password='[REDACTED]'\\n"
    """
    formatter = Formatter(
        filter=filter if filter is not None else build_filter(filters),
        template=Template(template),
    )
    get_logger(__name__).debug(
        "formatter.built",
        template=template,
        filter=type(formatter.filter).__name__,
    )
    return formatter


def formatter_from_config(config: LoglineConfig | None = None) -> Formatter:
    """Build a Formatter from LOGLINE_TEMPLATE and LOGLINE_FILTERS."""
    config = config or get_config()
    try:
        return build_formatter(config.filter_rules, config.template)
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid LOGLINE_FILTERS: {exc}", filters=config.filters
        ) from exc
