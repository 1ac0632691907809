"""Pytest configuration and fixtures.

Provides environment isolation for ``FALLIBLE_*`` settings. Fixtures here are
autouse unless noted.
"""

from __future__ import annotations

import logging
import os

import pytest

from fallible import reload_settings

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_fallible_env(request, monkeypatch):
    """Ensure a clean ``FALLIBLE_*`` environment and settings cache per test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        yield
        return

    for key in list(os.environ.keys()):
        if key.startswith("FALLIBLE_"):
            monkeypatch.delenv(key, raising=False)
    reload_settings()
    yield
    monkeypatch.undo()
    reload_settings()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def fallible_debug_logs(caplog):
    """Capture DEBUG records from the ``fallible`` logger (not autouse)."""
    caplog.set_level(logging.DEBUG, logger="fallible")
    return caplog
