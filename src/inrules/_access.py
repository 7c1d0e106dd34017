"""Access strategies — pluggable field lookup over container shapes.

A strategy is any function ``(key, container) -> value``. It must either
return a present value or raise MissingKeyError; it never returns a
placeholder. Two shapes ship with the core:

- map_access_strategy: any ``Mapping``
- document_access_strategy: a JSON object, parsed or as JSON text

Adding an input shape means writing another function with the same
signature and passing it to ``using`` or RuleSettings, not subclassing.

The process-wide default strategy is consulted by unqualified keyed
lookups (``g.any_str("key")``) at invocation time. Rules built without
explicit RuleSettings therefore follow later changes to the default.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from inrules._coerce import MissingKeyError, TypeMismatchError

if TYPE_CHECKING:
    from inrules._types import AccessStrategy

logger = logging.getLogger(__name__)


def map_access_strategy(key: str, container: Any) -> Any:
    """Look up ``key`` in a mapping.

    Raises:
        TypeMismatchError: If the container is not a Mapping.
        MissingKeyError: If the key is absent or maps to None.
    """
    if not isinstance(container, Mapping):
        raise TypeMismatchError("Mapping", container)
    value = container.get(key)
    if value is None:
        raise MissingKeyError(key)
    return value


def document_access_strategy(key: str, container: Any) -> Any:
    """Look up ``key`` in a JSON object.

    The container may be an already-parsed JSON object or JSON text.
    Scalar nodes come back as native bool/int/float/str; nested objects
    and arrays come back as-is. JSON null is treated as an absent key.

    JSON text is parsed again on every lookup. A given clause that reads
    several fields from the same text should parse it once, e.g. with
    ``g.any_object()``, and read the fields from the resulting mapping.

    Raises:
        TypeMismatchError: If the container is not a JSON object.
        MissingKeyError: If the key is absent or null.
    """
    document = as_document_object(container)
    value = document.get(key)
    if value is None:
        raise MissingKeyError(key)
    return value


def load_document(container: Any) -> Any:
    """Return the JSON tree for ``container``, parsing JSON text if needed."""
    if isinstance(container, (str, bytes, bytearray)):
        try:
            return json.loads(container)
        except ValueError as e:
            raise TypeMismatchError("JSON document", container) from e
    return container


def as_document_object(container: Any) -> Mapping[str, Any]:
    document = load_document(container)
    if not isinstance(document, Mapping):
        raise TypeMismatchError("JSON object", document)
    return document


def as_document_array(container: Any) -> list[Any]:
    document = load_document(container)
    if not isinstance(document, list):
        raise TypeMismatchError("JSON array", document)
    return document


# ═══════════════════════════════════════════════════════════════════════════════
# Process-wide default
# ═══════════════════════════════════════════════════════════════════════════════

_default_strategy: AccessStrategy = document_access_strategy
_default_lock = threading.Lock()


def get_default_access_strategy() -> AccessStrategy:
    """Return the current process-wide default access strategy."""
    return _default_strategy


def set_default_access_strategy(strategy: AccessStrategy) -> None:
    """Replace the process-wide default access strategy.

    Affects every later unqualified keyed lookup, including those made by
    rules that were built before this call.
    """
    global _default_strategy
    if not callable(strategy):
        raise TypeMismatchError("callable access strategy", strategy)
    with _default_lock:
        _default_strategy = strategy
    logger.info("default access strategy set to %s", _strategy_name(strategy))


def use_map_access_strategy() -> None:
    """Make the mapping strategy the process-wide default."""
    set_default_access_strategy(map_access_strategy)


def use_document_access_strategy() -> None:
    """Make the JSON document strategy the process-wide default."""
    set_default_access_strategy(document_access_strategy)


def _strategy_name(strategy: AccessStrategy) -> str:
    return getattr(strategy, "__qualname__", None) or repr(strategy)
