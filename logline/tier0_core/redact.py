"""
logline.tier0_core.redact
──────────────────────────
Field filters applied to structured payloads before they are rendered.
Provides key / dotted-path redaction, regex-based pattern scrubbing, and a
structlog processor that redacts the package's own diagnostics.

Every filter honours the same contract: apply() returns a new mapping, never
mutates its input, keeps the insertion order of the keys it retains, and is
idempotent.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Protocol, Sequence, runtime_checkable

# ── Default redacted key names (case-insensitive) ─────────────────────────

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "api_key", "apikey",
    "access_token", "refresh_token", "private_key", "client_secret",
    "authorization", "x-api-key", "cookie", "session", "ssn",
    "credit_card", "card_number", "cvv", "pin",
})

# ── Regex patterns for inline scrubbing ───────────────────────────────────

_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    # Bearer tokens
    (re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", re.I), "Bearer [REDACTED]"),
    # Basic auth
    (re.compile(r"Basic\s+[A-Za-z0-9+/=]+", re.I), "Basic [REDACTED]"),
    # Generic key=value secrets
    (re.compile(
        r"(password|secret|token|api[_-]?key)\s*=\s*[^\s&\"']+",
        re.I,
    ), r"\1=[REDACTED]"),
)

REDACTED = "[REDACTED]"


def _rebuild(value: list | tuple, items: list[Any]) -> Any:
    """Same kind of sequence as *value*, holding *items*."""
    if value.__class__ is list:
        return items
    if value.__class__ is tuple:
        return tuple(items)
    if hasattr(value, "_fields"):
        return type(value)(*items)
    return value


# ── Filter capability ─────────────────────────────────────────────────────

@runtime_checkable
class Filter(Protocol):
    """Anything that turns a field mapping into a (possibly redacted) copy."""

    def apply(self, fields: Mapping[str, Any]) -> dict[str, Any]: ...


@dataclass(frozen=True)
class NullFilter:
    """Pass-through filter. Returns a shallow copy so callers may mutate it."""

    def apply(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        return dict(fields)


@dataclass(frozen=True)
class KeyFilter:
    """
    Redact values by key name or dotted path.

    A bare rule (``"password"``) matches that key at any depth, ignoring case.
    A dotted rule (``"user.card.number"``) matches only that exact path from
    the top of the mapping. Matched values become REDACTED; keys stay.

    Usage:
        KeyFilter(("password", "user.ssn")).apply(
            {"user": {"ssn": "123", "name": "bob"}, "password": "x"}
        )
        # → {"user": {"ssn": "[REDACTED]", "name": "bob"}, "password": "[REDACTED]"}
    """

    rules: tuple[str, ...] = ()
    _names: frozenset[str] = field(init=False, repr=False, compare=False)
    _paths: frozenset[tuple[str, ...]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        rules = tuple(str(rule).strip() for rule in self.rules)
        if any(not rule or "" in rule.split(".") for rule in rules):
            raise ValueError(f"Filter rules must be non-empty names or dotted paths: {rules!r}")
        object.__setattr__(self, "rules", rules)
        object.__setattr__(self, "_names", frozenset(r.lower() for r in rules if "." not in r))
        object.__setattr__(
            self, "_paths", frozenset(tuple(r.split(".")) for r in rules if "." in r)
        )

    def apply(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        return self._redact_mapping(fields, ())

    def _redact_mapping(self, data: Mapping[str, Any], path: tuple[str, ...]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for k, v in data.items():
            key_path = path + (str(k),)
            if str(k).lower() in self._names or key_path in self._paths:
                result[k] = REDACTED
            else:
                result[k] = self._redact_value(v, key_path)
        return result

    def _redact_value(self, value: Any, path: tuple[str, ...]) -> Any:
        if isinstance(value, Mapping):
            return self._redact_mapping(value, path)
        if isinstance(value, (list, tuple)):
            return _rebuild(value, [
                self._redact_mapping(item, path) if isinstance(item, Mapping) else item
                for item in value
            ])
        return value


@dataclass(frozen=True)
class PatternFilter:
    """Scrub secrets embedded in string values, at any depth."""

    patterns: tuple[tuple[re.Pattern[str], str], ...] = _PATTERNS

    def apply(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        return {k: self._scrub(v) for k, v in fields.items()}

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, str):
            return scrub_string(value, self.patterns)
        if isinstance(value, Mapping):
            return self.apply(value)
        if isinstance(value, (list, tuple)):
            return _rebuild(value, [self._scrub(item) for item in value])
        return value


@dataclass(frozen=True)
class ChainFilter:
    """Apply several filters in order."""

    filters: tuple[Filter, ...] = ()

    def apply(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(fields)
        for f in self.filters:
            result = f.apply(result)
        return result


_DEFAULT_FILTER = KeyFilter(tuple(sorted(_SENSITIVE_KEYS)))


# ── Public API ─────────────────────────────────────────────────────────────

def build_filter(rules: Iterable[str] | None = None) -> Filter:
    """
    Build the filter for an ordered sequence of redaction rules.
    No rules → NullFilter.
    """
    rules = tuple(rules or ())
    if not rules:
        return NullFilter()
    return KeyFilter(rules)


def default_filter() -> KeyFilter:
    """KeyFilter over the built-in sensitive key names."""
    return _DEFAULT_FILTER


def redact_dict(
    data: Mapping[str, Any],
    sensitive_keys: Sequence[str] | frozenset[str] | None = None,
) -> dict[str, Any]:
    """
    Return a copy of *data* with sensitive key values replaced by REDACTED.
    Recurses into nested mappings and lists.
    """
    if sensitive_keys is None:
        return _DEFAULT_FILTER.apply(data)
    return KeyFilter(tuple(sensitive_keys)).apply(data)


def scrub_string(
    text: str,
    patterns: Sequence[tuple[re.Pattern[str], str]] = _PATTERNS,
) -> str:
    """Apply regex-based scrubbing to an arbitrary string."""
    for pattern, replacement in patterns:
        text = pattern.sub(replacement, text)
    return text


def structlog_redact_processor(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    structlog processor that redacts sensitive keys from the event dict.
    Add to the structlog processor chain before any serialisation step.
    """
    return redact_dict(event_dict)


__all__ = [
    "REDACTED",
    "Filter",
    "NullFilter",
    "KeyFilter",
    "PatternFilter",
    "ChainFilter",
    "build_filter",
    "default_filter",
    "redact_dict",
    "scrub_string",
    "structlog_redact_processor",
]
