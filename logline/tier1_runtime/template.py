"""
logline.tier1_runtime.template
───────────────────────────────
Named-field line templates. A template is plain text with ``%<name>s``
placeholders (optionally padded: ``%<severity>-5s`` / ``%<severity>5s``) and
``%%`` for a literal percent sign. Templates are parsed once, when they are
built; substitution is a lookup per placeholder, never code execution.

Usage:
    Template("%<time>s [%<severity>s] %<message>s").substitute(fields)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping

from logline.tier0_core.config import DEFAULT_TEMPLATE
from logline.tier0_core.errors import TemplateError

_DIRECTIVE = re.compile(r"%(?:(%)|<([A-Za-z_][A-Za-z0-9_]*)>(-?\d+)?s)")


@dataclass(frozen=True)
class Placeholder:
    name: str
    width: int = 0

    def fill(self, value: Any) -> str:
        text = to_text(value)
        if self.width < 0:
            return text.ljust(-self.width)
        return text.rjust(self.width)


def to_text(value: Any) -> str:
    """Plain text for a template value. None is blank, dates are ISO-8601."""
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class Template:
    source: str = DEFAULT_TEMPLATE
    parts: tuple[str | Placeholder, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", _parse(self.source))

    @property
    def fields(self) -> tuple[str, ...]:
        """Placeholder names, in order of appearance."""
        return tuple(p.name for p in self.parts if isinstance(p, Placeholder))

    def substitute(self, fields: Mapping[str, Any]) -> str:
        """
        Fill every placeholder from *fields*. Extra fields are ignored; a
        missing one raises TemplateError before any text is produced.
        """
        out: list[str] = []
        for part in self.parts:
            if isinstance(part, str):
                out.append(part)
                continue
            if part.name not in fields:
                raise TemplateError(
                    f"Template field {part.name!r} is not present in the log entry",
                    field=part.name,
                    template=self.source,
                )
            out.append(part.fill(fields[part.name]))
        return "".join(out)


def _parse(source: str) -> tuple[str | Placeholder, ...]:
    parts: list[str | Placeholder] = []
    literal: list[str] = []
    pos = 0
    while True:
        start = source.find("%", pos)
        if start == -1:
            literal.append(source[pos:])
            break
        literal.append(source[pos:start])
        match = _DIRECTIVE.match(source, start)
        if match is None:
            raise TemplateError(
                f"Malformed template directive at offset {start} in {source!r}",
                template=source,
            )
        if match.group(1):
            literal.append("%")
        else:
            if literal:
                parts.append("".join(literal))
                literal = []
            parts.append(Placeholder(match.group(2), int(match.group(3) or 0)))
        pos = match.end()
    tail = "".join(literal)
    if tail:
        parts.append(tail)
    return tuple(p for p in parts if p != "")
