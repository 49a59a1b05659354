"""
Shared fixtures for the NESTCONF test suite.
"""

import pytest

from nestconf.framework.configuration import registry, ViewConfiguration


@pytest.fixture(autouse=True)
def clean_registry():
    """Every test starts and ends with an empty namespace registry."""
    registry.clear()
    yield
    registry.clear()


@pytest.fixture
def ascii_view():
    """Deterministic rendering options independent of the terminal."""
    return ViewConfiguration(truncate_width=40, utf8=False, pager="less -r", terminal_lines=1000)


@pytest.fixture
def utf8_view():
    return ViewConfiguration(truncate_width=40, utf8=True, pager="less -r", terminal_lines=1000)
