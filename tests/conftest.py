"""Shared fixtures for formkit tests."""

import pytest

from formkit.core.config import reset_config
from formkit.utils.logger import LogLevel, MemoryHandler, get_logger


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def log_records(monkeypatch):
    """Capture records of the validation logger at DEBUG level."""
    logger = get_logger("formkit.validation")
    handler = MemoryHandler()
    logger.add_handler(handler)
    monkeypatch.setattr(logger, "level", LogLevel.DEBUG)
    yield handler.records
    logger.remove_handler(handler)
