"""Core type aliases for inrules.

The rule pipeline is built from four kinds of plain callables:
- AccessStrategy looks up a named field inside a container
- Test is the matching predicate over the working value E
- Produce computes the rule result from E
- Action performs a side effect on E (its return value is ignored)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

# (key, container) -> value. Must raise MissingKeyError instead of
# returning a placeholder for absent keys.
type AccessStrategy = Callable[[str, Any], Any]

type Test[E] = Callable[[E], bool]

type Produce[E, T] = Callable[[E], T]

type Action[E] = Callable[[E], object]
