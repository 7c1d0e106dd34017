"""Test utilities for inrules.

Provides a recording action for asserting on the side effects of
``then_do``, ``always_do`` and ``otherwise_do`` in tests and examples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Recorder:
    """An action that records every value it is called with.

    >>> from inrules import rule
    >>> from inrules.testing import Recorder
    >>> seen = Recorder()
    >>> r = rule("echo", lambda r: r.given(lambda g: g.any_str()).always_do(seen))
    >>> r("hello")
    True
    >>> seen.calls
    ['hello']
    """

    calls: list[Any] = field(default_factory=list)

    def __call__(self, value: Any, /) -> None:
        self.calls.append(value)

    @property
    def count(self) -> int:
        return len(self.calls)

    def reset(self) -> None:
        self.calls.clear()
