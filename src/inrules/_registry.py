"""Access strategy registry for config-driven settings.

The registry resolves strategy names found in config into the strategy
functions themselves:

- RegistryBuilder → .build() → Registry (immutable)
- Strategies are plain callables: (key, container) → value
- load_settings() turns a SettingsConfig into RuleSettings

Example::

    builder = register_core_strategies(RegistryBuilder())
    registry = builder.build()

    config = parse_settings_config({"access_strategy": "map"})
    settings = registry.load_settings(config)
    greet = rule("greet", build, settings=settings)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from inrules._access import document_access_strategy, map_access_strategy
from inrules._coerce import RuleError
from inrules._config import RuleSettings

if TYPE_CHECKING:
    from inrules._config import SettingsConfig
    from inrules._types import AccessStrategy


class UnknownStrategyError(RuleError):
    """A strategy name was not found in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown access strategy: {name!r} (registered: {registered})"
        else:
            msg = f"unknown access strategy: {name!r} (no strategies are registered)"
        super().__init__(msg)


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register access strategies under names, then call build() to produce
    an immutable Registry. No registration is possible after build.
    """

    def __init__(self) -> None:
        self._strategies: dict[str, AccessStrategy] = {}

    def strategy(self, name: str, strategy: AccessStrategy) -> RegistryBuilder:
        """Register an access strategy under ``name``."""
        if not callable(strategy):
            msg = f"strategy {name!r} must be callable, got {type(strategy).__name__}"
            raise TypeError(msg)
        self._strategies[name] = strategy
        return self

    def build(self) -> Registry:
        """Freeze the registry."""
        return Registry(_strategies=MappingProxyType(dict(self._strategies)))


def register_core_strategies(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the built-in "map" and "document" strategies."""
    return builder.strategy("map", map_access_strategy).strategy(
        "document", document_access_strategy
    )


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable name → access strategy lookup."""

    _strategies: MappingProxyType[str, AccessStrategy] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_settings(self, config: SettingsConfig) -> RuleSettings:
        """Resolve a SettingsConfig into RuleSettings.

        Raises:
            UnknownStrategyError: The access strategy name is not registered.
        """
        if config.access_strategy is None:
            return RuleSettings()
        return RuleSettings(access_strategy=self.strategy(config.access_strategy))

    def strategy(self, name: str) -> AccessStrategy:
        """Look up a registered strategy by name."""
        found = self._strategies.get(name)
        if found is None:
            raise UnknownStrategyError(name, list(self._strategies))
        return found

    @property
    def strategy_count(self) -> int:
        """Number of registered strategies."""
        return len(self._strategies)

    def contains_strategy(self, name: str) -> bool:
        return name in self._strategies

    def strategy_names(self) -> list[str]:
        """Return all registered strategy names (sorted)."""
        return sorted(self._strategies)
