"""Pytest configuration and fixtures.

Provides environment isolation, config reset, logging configuration and a few
shared errors. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os

import pytest

from result_or_error import Config, Error, configure

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_env(request, monkeypatch):
    """Clear RESULT_OR_ERROR_* env vars so tests see library defaults.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("RESULT_OR_ERROR_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_config():
    """Run every test against, and restore, the default configuration."""
    configure(Config())
    yield
    configure(Config())


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# =============================================================================
# Shared errors (opt-in)
# =============================================================================


@pytest.fixture
def not_found() -> Error:
    return Error.not_found()


@pytest.fixture
def name_too_short() -> Error:
    return Error.validation("User.Name", "Name is too short")


@pytest.fixture
def too_young() -> Error:
    return Error.validation("User.Age", "User is too young")
