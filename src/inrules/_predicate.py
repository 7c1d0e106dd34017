"""Predicate composition — the ``when`` clause as an inspectable tree.

Leaf wraps a single test callable. And, Or compose predicates with
short-circuit evaluation, left to right in the order the stages were
appended to the builder chain.

Every node is itself callable with the working value, so a Predicate can
be used anywhere a plain ``E -> bool`` test is expected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from inrules._types import Test


@dataclass(frozen=True, slots=True)
class Leaf[E]:
    """A single test over the working value."""

    test: Test[E]

    def __call__(self, value: E, /) -> bool:
        return bool(self.test(value))

    def __repr__(self) -> str:
        name = getattr(self.test, "__qualname__", None) or repr(self.test)
        return f"Leaf({name})"


@dataclass(frozen=True, slots=True)
class And[E]:
    """All predicates must hold (logical AND).

    Short-circuits on the first False. Empty And returns True (vacuous truth).
    """

    predicates: tuple[Predicate[E], ...]

    def __call__(self, value: E, /) -> bool:
        return all(p(value) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Or[E]:
    """Any predicate must hold (logical OR).

    Short-circuits on the first True. Empty Or returns False.
    """

    predicates: tuple[Predicate[E], ...]

    def __call__(self, value: E, /) -> bool:
        return any(p(value) for p in self.predicates)


type Predicate[E] = Leaf[E] | And[E] | Or[E]


def leaf[E](test: Test[E] | Predicate[E]) -> Predicate[E]:
    """Wrap a plain test callable; existing predicate nodes pass through."""
    if isinstance(test, (Leaf, And, Or)):
        return test
    return Leaf(test)


def and_predicate[E](left: Predicate[E], right: Test[E]) -> Predicate[E]:
    """Compose ``left AND right``.

    A left-hand And is extended in place of nesting, which keeps the
    evaluation order and short-circuit behaviour while flattening the tree.
    """
    rhs = leaf(right)
    if isinstance(left, And):
        return And((*left.predicates, rhs))
    return And((left, rhs))


def or_predicate[E](left: Predicate[E], right: Test[E]) -> Predicate[E]:
    """Compose ``left OR right``.

    Symmetric with and_predicate.
    """
    rhs = leaf(right)
    if isinstance(left, Or):
        return Or((*left.predicates, rhs))
    return Or((left, rhs))


def predicate_depth(p: Predicate[Any]) -> int:
    """Calculate the nesting depth of a predicate tree."""
    match p:
        case Leaf():
            return 1
        case And(predicates=ps) | Or(predicates=ps):
            return 1 + max((predicate_depth(sub) for sub in ps), default=0)
        case _:  # pragma: no cover
            return 0
