"""Given expressions — typed views over the raw rule argument.

A GivenExpression wraps the raw argument passed to a rule and is handed to
the ``given`` clause, which picks the view it needs::

    rule("login", lambda r: r.given(lambda g: g.any_str("requestPath"))...)

Called without a key, ``any_*`` coerces the whole argument. Called with a
key, the field is first looked up through an access strategy: the rule's
injected strategy if it has one, otherwise the process-wide default as it
is at the moment of the lookup.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from inrules._access import (
    as_document_array,
    as_document_object,
    document_access_strategy,
    get_default_access_strategy,
    map_access_strategy,
)
from inrules._coerce import (
    TypeMismatchError,
    cast,
    to_bool,
    to_double,
    to_float,
    to_int,
    to_long,
    to_short,
    to_str,
)

if TYPE_CHECKING:
    from inrules._types import AccessStrategy


@dataclass(frozen=True, slots=True)
class GivenExpression:
    """The raw rule argument plus the strategy used for keyed lookups.

    ``access_strategy`` of None means "use the process default".
    """

    arg: Any
    access_strategy: AccessStrategy | None = None

    def using(self, access_strategy: AccessStrategy) -> NestedGivenExpression:
        """Bind an explicit access strategy for nested field lookups."""
        return NestedGivenExpression(self.arg, access_strategy)

    def using_map(self) -> NestedGivenExpression:
        return self.using(map_access_strategy)

    def using_document(self) -> NestedGivenExpression:
        return self.using(document_access_strategy)

    # ── Whole-argument views ──────────────────────────────────────────────

    def any[T](self, cls: type[T]) -> T:
        """View the argument as an instance of ``cls`` (checked)."""
        return cast(self.arg, cls)

    def any_map(self, key: str | None = None) -> Mapping[Any, Any]:
        if key is not None:
            return self._nested().any_map(key)
        return cast(self.arg, Mapping)

    def any_mutable_map(self, key: str | None = None) -> MutableMapping[Any, Any]:
        if key is not None:
            return self._nested().any_mutable_map(key)
        return cast(self.arg, MutableMapping)

    def any_object(self, key: str | None = None) -> Mapping[str, Any]:
        """View the argument (or a field) as a JSON object."""
        if key is not None:
            return self._nested().any_object(key)
        return as_document_object(self.arg)

    def any_array(self, key: str | None = None) -> list[Any]:
        """View the argument (or a field) as a JSON array."""
        if key is not None:
            return self._nested().any_array(key)
        return as_document_array(self.arg)

    # ── Scalar coercions ──────────────────────────────────────────────────

    def any_str(self, key: str | None = None) -> str:
        if key is not None:
            return self._nested().any_str(key)
        return to_str(self.arg)

    def any_short(self, key: str | None = None) -> int:
        if key is not None:
            return self._nested().any_short(key)
        return to_short(self.arg)

    def any_int(self, key: str | None = None) -> int:
        if key is not None:
            return self._nested().any_int(key)
        return to_int(self.arg)

    def any_long(self, key: str | None = None) -> int:
        if key is not None:
            return self._nested().any_long(key)
        return to_long(self.arg)

    def any_float(self, key: str | None = None) -> float:
        if key is not None:
            return self._nested().any_float(key)
        return to_float(self.arg)

    def any_double(self, key: str | None = None) -> float:
        if key is not None:
            return self._nested().any_double(key)
        return to_double(self.arg)

    def any_bool(self, key: str | None = None) -> bool:
        if key is not None:
            return self._nested().any_bool(key)
        return to_bool(self.arg)

    def _nested(self) -> NestedGivenExpression:
        # Resolved per lookup so a changed default applies to existing rules.
        strategy = self.access_strategy or get_default_access_strategy()
        return NestedGivenExpression(self.arg, strategy)


@dataclass(frozen=True, slots=True)
class NestedGivenExpression:
    """Keyed views over the argument through one fixed access strategy."""

    arg: Any
    access_strategy: AccessStrategy

    def get(self, key: str) -> Any:
        """Raw looked-up value. Raises MissingKeyError if absent."""
        return self.access_strategy(key, self.arg)

    def any_map(self, key: str) -> Mapping[Any, Any]:
        return cast(self.get(key), Mapping)

    def any_mutable_map(self, key: str) -> MutableMapping[Any, Any]:
        return cast(self.get(key), MutableMapping)

    def any_object(self, key: str) -> Mapping[str, Any]:
        value = self.get(key)
        if not isinstance(value, Mapping):
            raise TypeMismatchError("JSON object", value)
        return value

    def any_array(self, key: str) -> list[Any]:
        value = self.get(key)
        if not isinstance(value, list):
            raise TypeMismatchError("JSON array", value)
        return value

    def any_str(self, key: str) -> str:
        return to_str(self.get(key))

    def any_short(self, key: str) -> int:
        return to_short(self.get(key))

    def any_int(self, key: str) -> int:
        return to_int(self.get(key))

    def any_long(self, key: str) -> int:
        return to_long(self.get(key))

    def any_float(self, key: str) -> float:
        return to_float(self.get(key))

    def any_double(self, key: str) -> float:
        return to_double(self.get(key))

    def any_bool(self, key: str) -> bool:
        return to_bool(self.get(key))
