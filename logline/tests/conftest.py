"""
logline test configuration.

Tests never read a developer's .env or LOGLINE_* shell settings: every
variable is pinned here and the cached config is reset around each test.
"""
from __future__ import annotations

import os
from datetime import datetime, timezone

import pytest

# ── Pin configuration ──────────────────────────────────────────────────────
# These must be set before any logline modules are imported.

os.environ["LOGLINE_TEMPLATE"] = "%<message>s"
os.environ["LOGLINE_LEVEL"] = "info"
os.environ["LOGLINE_FILTERS"] = ""
os.environ["LOGLINE_LOG_LEVEL"] = "WARNING"
os.environ["LOGLINE_LOG_FORMAT"] = "json"
os.environ.pop("LOGLINE_PROGNAME", None)


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_config():
    """Each test sees config built from the environment it set up."""
    from logline.tier0_core.config import _reset_config

    _reset_config()
    yield
    _reset_config()


@pytest.fixture(autouse=True)
def restore_clock():
    import logline.tier1_runtime.clock as _clock

    original = _clock.get_clock()
    yield
    _clock.set_clock(original)


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2025, 1, 15, 16, 0, 23, tzinfo=timezone.utc)


@pytest.fixture
def formatter():
    """Formatter with the default (identity) template and no filter."""
    from logline.tier1_runtime.formatter import Formatter
    return Formatter()
