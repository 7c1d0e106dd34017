"""Shared fixtures for inrules tests.

Most tests work on plain dicts, so every test starts with the mapping
strategy as the process default and the previous default is restored
afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from inrules import (
    AccessStrategy,
    get_default_access_strategy,
    set_default_access_strategy,
    use_map_access_strategy,
)

# Captured before any test touches the process default.
_INITIAL_DEFAULT = get_default_access_strategy()


@pytest.fixture(autouse=True)
def _map_access_strategy() -> Iterator[None]:
    previous = get_default_access_strategy()
    use_map_access_strategy()
    yield
    set_default_access_strategy(previous)


@pytest.fixture
def initial_default_strategy() -> AccessStrategy:
    """The process default as it was when inrules was first imported."""
    return _INITIAL_DEFAULT
