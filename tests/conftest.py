"""Configuration file for pytest containing shared fixtures.

This module provides fixtures that can be used across multiple test files:
- quiet_logging: keeps driver DEBUG output out of test reports
"""

import pytest

from ioeffect.kernel.logging import configure_logging


@pytest.fixture(scope="session", autouse=True)
def quiet_logging() -> None:
    """Only surface warnings and errors while the suite runs."""
    configure_logging(level="WARNING", format="console", force_reconfigure=True)
