"""
logline.tier0_core.config
──────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic. Invalid values fail when the
config is loaded, not when the first line is rendered.

Minimal stack: pydantic-settings + python-dotenv
Configure via: LOGLINE_TEMPLATE, LOGLINE_LEVEL, LOGLINE_FILTERS,
               LOGLINE_PROGNAME, LOGLINE_LOG_LEVEL, LOGLINE_LOG_FORMAT
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logline.tier0_core.errors import ConfigurationError
from logline.tier0_core.levels import DEFAULT_LEVEL, Level

DEFAULT_TEMPLATE = "%<message>s"

_LOG_FORMATS = {"json", "console", "line"}


class LoglineConfig(BaseSettings):
    """
    Typed logline configuration.
    All env vars are prefixed with LOGLINE_.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # ── Formatter ─────────────────────────────────────────────────────────────
    template: str = Field(default=DEFAULT_TEMPLATE, alias="LOGLINE_TEMPLATE")
    filters: str = Field(default="", alias="LOGLINE_FILTERS")

    # ── Backend ───────────────────────────────────────────────────────────────
    level: str = Field(default=DEFAULT_LEVEL.name.lower(), alias="LOGLINE_LEVEL")
    progname: str | None = Field(default=None, alias="LOGLINE_PROGNAME")

    # ── Diagnostics ───────────────────────────────────────────────────────────
    log_level: str = Field(default="WARNING", alias="LOGLINE_LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOGLINE_LOG_FORMAT")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        return Level.parse(v).name.lower()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in _LOG_FORMATS:
            raise ValueError(f"log_format must be one of {_LOG_FORMATS}, got {v!r}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def severity(self) -> Level:
        return Level.parse(self.level)

    @property
    def filter_rules(self) -> tuple[str, ...]:
        """LOGLINE_FILTERS split on commas, blanks dropped, order kept."""
        return tuple(rule.strip() for rule in self.filters.split(",") if rule.strip())


@lru_cache(maxsize=1)
def get_config() -> LoglineConfig:
    """
    Return the singleton logline config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    Invalid LOGLINE_* values raise ConfigurationError.
    """
    try:
        return LoglineConfig()
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid LOGLINE_* settings: {exc.error_count()} error(s)",
            fields=[".".join(str(p) for p in err["loc"]) for err in exc.errors()],
        ) from exc


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()
