"""
Pytest fixtures shared by the static-queue test suite.
"""
import sys

import pytest
from loguru import logger

from static_queue.core.config import QueueSettings, Settings


@pytest.fixture(autouse=True)
def _restore_logger():
    """The CLI replaces loguru sinks; put the default one back after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def settings_fixture() -> Settings:
    return Settings(queue=QueueSettings(capacity=5))


@pytest.fixture
def settings_file(tmp_path):
    """Write a settings YAML into tmp_path and return its path."""
    def _write(text: str):
        path = tmp_path / "settings.yaml"
        path.write_text(text, encoding="utf-8")
        return path
    return _write
