"""
logline.tier0_core.errors
──────────────────────────
Error taxonomy for the formatter. Every error has a stable machine-readable
code and an internal detail message. Errors raised here are never caught
inside logline; they surface to whoever called render() or built the
formatter.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class LoglineError(Exception):
    """
    Base class for all logline errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - detail: human-readable description of what went wrong
    - metadata: extra context (field names, offending values)
    """

    code: str = "logline_error"

    def __init__(
        self,
        detail: str = "An unexpected formatting error occurred.",
        code: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.detail = detail
        self.metadata = metadata
        super().__init__(detail)

    def __str__(self) -> str:
        return self.detail

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.detail,
                **self.metadata,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class TemplateError(LoglineError, KeyError):
    """
    Template and field mapping do not fit together: a placeholder names a
    field the entry does not carry, or the template itself is malformed.
    """
    code = "template_error"

    def __init__(
        self,
        detail: str = "Template could not be applied.",
        field: str | None = None,
        template: str | None = None,
        **metadata: Any,
    ) -> None:
        self.field = field
        self.template = template
        super().__init__(detail, field=field, template=template, **metadata)


class ConfigurationError(LoglineError):
    """Misconfiguration detected while building a formatter or backend."""
    code = "configuration_error"
