"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import os
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from vimpytype.config import Settings
from vimpytype.core.scheduling import ManualScheduler


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def setup_logging():
    """Route loguru output to stderr at DEBUG for the duration of a test."""
    from loguru import logger

    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG",
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )

    yield

    logger.remove()


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def scheduler():
    """Deterministic clock starting at t=0."""
    return ManualScheduler()


@pytest.fixture
def settings(monkeypatch):
    """Default settings, independent of the environment and any .env file."""
    for name in list(os.environ):
        if name.upper().startswith("VIMPYTYPE_"):
            monkeypatch.delenv(name)
    return Settings(_env_file=None, difficulty="easy")


class FixedChoice:
    """Stand-in for random.Random that always picks the same target."""

    def __init__(self, *targets: str):
        self.targets = list(targets)
        self.calls = 0

    def choice(self, seq):
        target = self.targets[min(self.calls, len(self.targets) - 1)]
        self.calls += 1
        assert target in seq
        return target


@pytest.fixture
def fixed_choice():
    """Factory for FixedChoice."""
    return FixedChoice


@pytest.fixture
def bracket_lines():
    return ["def f(a, b):", "    return (a+b)"]
