"""
logline
───────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from logline.tier0_core.config import DEFAULT_TEMPLATE, LoglineConfig, get_config
from logline.tier0_core.errors import ConfigurationError, LoglineError, TemplateError
from logline.tier0_core.levels import DEFAULT_LEVEL, Level
from logline.tier0_core.logging import get_logger
from logline.tier0_core.redact import (
    REDACTED,
    ChainFilter,
    Filter,
    KeyFilter,
    NullFilter,
    PatternFilter,
    build_filter,
    default_filter,
)

from logline.tier1_runtime.bridge import LineFormatter, LineRenderer
from logline.tier1_runtime.clock import Clock, get_clock, set_clock
from logline.tier1_runtime.formatter import Formatter, build_formatter, formatter_from_config
from logline.tier1_runtime.message import ErrorValue, normalize
from logline.tier1_runtime.stream import StreamBackend, backend_from_config
from logline.tier1_runtime.template import Template

__version__ = "0.1.0"
__all__ = [
    # config
    "DEFAULT_TEMPLATE", "LoglineConfig", "get_config",
    # errors
    "LoglineError", "TemplateError", "ConfigurationError",
    # levels
    "Level", "DEFAULT_LEVEL",
    # logging
    "get_logger",
    # filters
    "Filter", "NullFilter", "KeyFilter", "PatternFilter", "ChainFilter",
    "REDACTED", "build_filter", "default_filter",
    # formatter
    "Formatter", "Template", "ErrorValue", "normalize",
    "build_formatter", "formatter_from_config",
    # backend
    "StreamBackend", "backend_from_config",
    # clock
    "Clock", "get_clock", "set_clock",
    # bridges
    "LineFormatter", "LineRenderer",
]
