"""
Shared test fixtures.
"""

import logging

import pytest

from spgen.config import GenerationConfig
from spgen.random_source import SeededRandomSource


class FixedSource:
    """Always returns the same index (clamped to the bound)."""

    def __init__(self, index: int = 0) -> None:
        self.index = index
        self.calls = 0

    def randbelow(self, n: int) -> int:
        self.calls += 1
        return min(self.index, n - 1)


@pytest.fixture
def bare_config() -> GenerationConfig:
    """Every switch off and no custom symbols: an empty pool."""
    return GenerationConfig(
        length=10,
        include_numbers=False,
        include_lowercase=False,
        include_uppercase=False,
        begin_with_letter=False,
        exclude_similar=False,
        no_duplicates=False,
        remove_sequential=False,
        custom_symbols="",
    )


@pytest.fixture
def seeded_source() -> SeededRandomSource:
    return SeededRandomSource(1234)


@pytest.fixture
def fixed_source() -> FixedSource:
    return FixedSource(0)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
