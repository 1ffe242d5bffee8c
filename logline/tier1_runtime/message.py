"""
logline.tier1_runtime.message
──────────────────────────────
Raw log payloads resolved into one of three shapes, once, at the start of a
render call:

    Mapping                       → StructuredPayload (filtered before rendering)
    BaseException / ErrorValue    → ErrorPayload      ({message, backtrace, error})
    anything else                 → PlainPayload      ({message: value})

No input is rejected for its shape; unrecognised values are plain messages.
"""
from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class ErrorValue:
    """Display message, type tag and backtrace of an error, detached from it."""
    message: str | None = None
    error: str | None = None
    backtrace: tuple[str, ...] = ()

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorValue":
        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        return cls(
            message=str(exc),
            error=type(exc).__name__,
            backtrace=tuple(f"{f.filename}:{f.lineno}:in {f.name}" for f in frames),
        )


@dataclass(frozen=True)
class StructuredPayload:
    fields: Mapping[str, Any] = field(default_factory=dict)

    def to_fields(self) -> dict[str, Any]:
        return dict(self.fields)


@dataclass(frozen=True)
class ErrorPayload:
    error: ErrorValue

    def to_fields(self) -> dict[str, Any]:
        return {
            "message": self.error.message,
            "backtrace": list(self.error.backtrace),
            "error": self.error.error,
        }


@dataclass(frozen=True)
class PlainPayload:
    value: Any = None

    def to_fields(self) -> dict[str, Any]:
        return {"message": self.value}


Payload = Union[StructuredPayload, ErrorPayload, PlainPayload]


def normalize(raw: Any) -> Payload:
    """Resolve a raw log payload into its payload shape."""
    if isinstance(raw, Mapping):
        return StructuredPayload(raw)
    if isinstance(raw, ErrorValue):
        return ErrorPayload(raw)
    if isinstance(raw, BaseException):
        return ErrorPayload(ErrorValue.from_exception(raw))
    return PlainPayload(raw)
