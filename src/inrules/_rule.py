"""Rule — an immutable given/when/then/otherwise unit of decision logic.

Rules are assembled through a strictly linear builder chain in which every
stage is a distinct type exposing only the legal next steps::

    RuleExpression.given()              -> WhenExpression
    WhenExpression.expect()/and_()      -> ThenExpression
    WhenExpression.whose()              -> ThenExpression
    WhenExpression.always_return()      -> RuleDefinition
    WhenExpression.always_do()          -> RuleDefinition[E, bool]
    ThenExpression.and_()/or_()         -> ThenExpression
    ThenExpression.then_return()/then() -> OtherwiseExpression
    ThenExpression.then_do()            -> RuleDefinition[E, bool]
    OtherwiseExpression.otherwise_return()/otherwise() -> RuleDefinition
    RuleDefinition.otherwise_do()       -> RuleDefinition

Example::

    greet = rule(
        "greet test",
        lambda r: r.given(lambda g: g.any_str())
        .expect(lambda s: s == "test")
        .then_return(lambda _: "Hello")
        .otherwise_return(lambda _: "Good bye"),
    )
    greet("test")  # "Hello"

INV: ``given`` runs exactly once per invocation, before ``when``; exactly
one of ``then``/``otherwise`` runs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from inrules._coerce import RuleError
from inrules._config import RuleSettings
from inrules._given import GivenExpression
from inrules._predicate import and_predicate, leaf, or_predicate

if TYPE_CHECKING:
    from inrules._predicate import Predicate
    from inrules._types import AccessStrategy, Action, Produce, Test

logger = logging.getLogger(__name__)

type Given[E] = Callable[[GivenExpression], E]


class RuleDefinitionError(RuleError):
    """A rule was built from an incomplete or malformed builder chain."""


def _always(_value: object) -> bool:
    return True


# ═══════════════════════════════════════════════════════════════════════════════
# Rule definition (terminal stage)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RuleDefinition[E, T]:
    """The four clauses of a rule, ready to evaluate."""

    given: Given[E]
    when: Predicate[E]
    then: Produce[E, T]
    otherwise: Produce[E, T]

    def extract(self, arg: Any, access_strategy: AccessStrategy | None = None) -> E:
        """Run the given clause to narrow ``arg`` into the working value."""
        return self.given(GivenExpression(arg, access_strategy))

    def otherwise_do(self, action: Action[E]) -> RuleDefinition[E, T]:
        """Run ``action`` on no-match, in addition to the current no-match branch.

        The action runs first; the previous no-match result is still returned.
        """
        previous = self.otherwise

        def otherwise(value: E) -> T:
            action(value)
            return previous(value)

        return RuleDefinition(self.given, self.when, self.then, otherwise)


# ═══════════════════════════════════════════════════════════════════════════════
# Builder stages
# ═══════════════════════════════════════════════════════════════════════════════


class RuleExpression:
    """Entry point of the builder chain."""

    __slots__ = ()

    def given[E](self, given: Given[E]) -> WhenExpression[E]:
        """Provide the clause that narrows the raw argument into E."""
        return WhenExpression(given)


@dataclass(frozen=True, slots=True)
class WhenExpression[E]:
    given: Given[E]

    def expect(self, test: Test[E]) -> ThenExpression[E]:
        """Provide the matching predicate."""
        return ThenExpression(self.given, leaf(test))

    def and_(self, test: Test[E]) -> ThenExpression[E]:
        """Alias for expect."""
        return self.expect(test)

    def whose(self, test: Test[E] | str) -> ThenExpression[E]:
        """Provide the predicate as a property of the working value.

        Accepts a callable (same as expect) or the name of an attribute of E;
        a method attribute is called with no arguments. The result's
        truthiness is the test.
        """
        if isinstance(test, str):
            return self.expect(_attribute_test(test))
        return self.expect(test)

    def always_return[T](self, produce: Produce[E, T]) -> RuleDefinition[E, T]:
        """Always match and return ``produce(value)``."""
        return self.expect(_always).then_return(produce).otherwise_return(produce)

    def always_do(self, action: Action[E]) -> RuleDefinition[E, bool]:
        """Always match and run ``action``; the rule returns True."""
        return self.expect(_always).then_do(action)


@dataclass(frozen=True, slots=True)
class ThenExpression[E]:
    given: Given[E]
    when: Predicate[E]

    def and_(self, test: Test[E]) -> ThenExpression[E]:
        """AND an additional test onto the predicate (short-circuit)."""
        return ThenExpression(self.given, and_predicate(self.when, test))

    def or_(self, test: Test[E]) -> ThenExpression[E]:
        """OR an additional test onto the predicate (short-circuit)."""
        return ThenExpression(self.given, or_predicate(self.when, test))

    def then_return[T](self, produce: Produce[E, T]) -> OtherwiseExpression[E, T]:
        return OtherwiseExpression(self.given, self.when, produce)

    def then[T](self, produce: Produce[E, T]) -> OtherwiseExpression[E, T]:
        """Alias for then_return."""
        return self.then_return(produce)

    def then_do(self, action: Action[E]) -> RuleDefinition[E, bool]:
        """Run ``action`` on match and return True; return False otherwise."""

        def then(value: E) -> bool:
            action(value)
            return True

        def otherwise(_value: E) -> bool:
            return False

        return RuleDefinition(self.given, self.when, then, otherwise)


@dataclass(frozen=True, slots=True)
class OtherwiseExpression[E, T]:
    given: Given[E]
    when: Predicate[E]
    then: Produce[E, T]

    def otherwise_return(self, produce: Produce[E, T]) -> RuleDefinition[E, T]:
        return RuleDefinition(self.given, self.when, self.then, produce)

    def otherwise(self, produce: Produce[E, T]) -> RuleDefinition[E, T]:
        """Alias for otherwise_return."""
        return self.otherwise_return(produce)


def _attribute_test(name: str) -> Test[Any]:
    def test(value: Any) -> bool:
        attr = getattr(value, name)
        return bool(attr() if callable(attr) else attr)

    test.__qualname__ = f"whose({name!r})"
    return test


# ═══════════════════════════════════════════════════════════════════════════════
# Rule
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Rule[E, T]:
    """A named, invokable rule.

    The description is metadata for logging and diagnostics; it is never
    consulted during evaluation. Invocation touches no mutable state of the
    rule itself, so a Rule may be shared freely across threads. Rules built
    without an explicit access strategy read the process-wide default on
    every keyed lookup.
    """

    description: str
    definition: RuleDefinition[E, T]
    settings: RuleSettings = field(default_factory=RuleSettings)

    def __call__(self, arg: Any, /) -> T:
        return self.invoke(arg)

    def invoke(self, arg: Any) -> T:
        """Evaluate the rule against ``arg``.

        Raises:
            MissingKeyError: A keyed lookup found no value.
            TypeMismatchError: The argument could not be viewed as requested.
            NumericParseError: A value could not be parsed as a number.
        """
        definition = self.definition
        value = definition.extract(arg, self.settings.access_strategy)
        if definition.when(value):
            logger.debug("rule %r matched", self.description)
            return definition.then(value)
        logger.debug("rule %r did not match", self.description)
        return definition.otherwise(value)


def rule[E, T](
    description: str,
    build: Callable[[RuleExpression], RuleDefinition[E, T]],
    settings: RuleSettings | None = None,
) -> Rule[E, T]:
    """Build a rule from a description and a builder-chain function.

    Raises:
        RuleDefinitionError: If ``build`` does not finish the chain with a
            RuleDefinition (e.g. it stops after then_return).
    """
    definition = build(RuleExpression())
    if not isinstance(definition, RuleDefinition):
        msg = (
            f"rule {description!r}: builder chain must end in a RuleDefinition, "
            f"got {type(definition).__name__}"
        )
        raise RuleDefinitionError(msg)
    return Rule(description, definition, settings or RuleSettings())


def rules[E, T](*members: Rule[E, T]) -> tuple[Rule[E, T], ...]:
    """Group rules into an ordered, fixed-size rule set.

    A rule set has no evaluation semantics of its own; iterate it and
    invoke each rule as needed.
    """
    return members

