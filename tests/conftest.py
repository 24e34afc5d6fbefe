"""Pytest fixtures shared by the argcheck test-suite."""
from __future__ import annotations

import pytest

from argcheck.config import get_settings
from argcheck.registry import CheckerRegistry


# ---------------------------------------------------------------------------
# 1. Global, reusable fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def registry() -> CheckerRegistry:  # noqa: D401
    """Return a fresh registry holding the standard example checkers."""
    reg = CheckerRegistry()
    reg.define("character", "isinstance(x, str)", "'%s' must be a character.")
    reg.define("scalar", "not isinstance(x, (list, tuple, set, frozenset, dict))", "`%s` must be a single value.")
    reg.define("nonempty", "len(x) > 0", "`%s` must be non-empty.")
    reg.define_against("among", "x in ref", "'%s' is not among %s")
    return reg


@pytest.fixture()
def default_registry(monkeypatch) -> CheckerRegistry:  # noqa: D401
    """Swap the process-wide registry for an empty one for the test's duration."""
    reg = CheckerRegistry()
    monkeypatch.setattr("argcheck.registry._DEFAULT_REGISTRY", reg)
    return reg


@pytest.fixture(autouse=True)
def _fresh_settings():  # noqa: D401
    """Make every test read ARGCHECK_* variables from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _silence_logging(caplog):  # noqa: D401
    """Reduce noise – most tests assert behaviour, not log output."""
    caplog.set_level("WARNING")
    yield


# ---------------------------------------------------------------------------
# 2. anyio backend selection – ensure tests run only with asyncio backend
# ---------------------------------------------------------------------------

@pytest.fixture()
def anyio_backend():  # noqa: D401
    """Force *anyio* tests to use the standard asyncio backend only."""
    return "asyncio"
