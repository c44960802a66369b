"""Shared fixtures for the creational core tests."""

import pytest

from creational.settings import get_settings
from creational.shapes import get_shape_factory


@pytest.fixture(autouse=True)
def reset_shared_state():
    """Give every test a fresh settings cache and shared shape factory."""
    get_settings.cache_clear()
    get_shape_factory.reset()
    yield
    get_settings.cache_clear()
    get_shape_factory.reset()
