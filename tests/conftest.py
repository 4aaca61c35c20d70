"""Pytest configuration and shared fixtures for dots tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
from dots import _config
from dots._logging import clear_log_hooks


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None]:
    """Every test starts from the default configuration and unconfigured logging."""
    _config.reset()
    yield
    _config.reset()
    dots_logger = logging.getLogger('dots')
    dots_logger.handlers.clear()
    dots_logger.setLevel(logging.NOTSET)
    dots_logger.propagate = True


@pytest.fixture
def log_events() -> Generator[list[dict]]:
    """Capture log entries emitted while the test runs."""
    from dots._logging import add_log_hook, configure_logging

    events: list[dict] = []
    configure_logging(level='DEBUG', json_output=True)
    clear_log_hooks()
    add_log_hook(events.append)
    yield events
    clear_log_hooks()


@pytest.fixture
def sample_some():
    """Sample Some value for testing."""
    from dots import Some

    return Some('hello')


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from dots import Err

    return Err(ValueError('test error'))
