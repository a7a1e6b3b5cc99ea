"""Pytest configuration and fixtures for assertify tests."""

import pytest

from assertify import configure
from sample_graphs import Person, build_order


@pytest.fixture
def generator():
    """Provide a generator with the default policy."""
    return configure()


@pytest.fixture
def order():
    """Provide a freshly built order graph."""
    return build_order()


@pytest.fixture
def person():
    """Provide the getter-style person from the null/empty-list scenario."""
    return Person("Ann", None, [])
