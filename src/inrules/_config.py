"""Settings and config types for rule construction.

Two layers, the same way the registry loads them:

  dict → parse_settings_config() → SettingsConfig → Registry.load_settings() → RuleSettings

| Config type     | Runtime type   |
|-----------------|----------------|
| SettingsConfig  | RuleSettings   |

RuleSettings is passed to ``rule(...)`` to inject an access strategy into a
single rule, or to ``configure(...)`` to install it as the process default.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from inrules._access import set_default_access_strategy

if TYPE_CHECKING:
    from inrules._types import AccessStrategy

# ═══════════════════════════════════════════════════════════════════════════════
# Runtime settings
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class RuleSettings:
    """Configuration injected into a rule at construction time.

    access_strategy of None defers to the process-wide default, read at
    invocation time.
    """

    access_strategy: AccessStrategy | None = None


def configure(settings: RuleSettings) -> None:
    """Install the settings' access strategy as the process-wide default.

    Settings without an access strategy leave the default unchanged.
    """
    if settings.access_strategy is not None:
        set_default_access_strategy(settings.access_strategy)


# ═══════════════════════════════════════════════════════════════════════════════
# Config types (frozen dataclasses) and parsing
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SettingsConfig:
    """Serializable form of RuleSettings.

    The access strategy is referenced by its registered name
    (e.g. "map", "document").
    """

    access_strategy: str | None = None


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


_KNOWN_FIELDS = frozenset({"access_strategy"})


def parse_settings_config(data: dict[str, Any]) -> SettingsConfig:
    """Parse a dict into a SettingsConfig.

    Expected shape: ``{"access_strategy": "map"}``. Every field is optional.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(set(data) - _KNOWN_FIELDS)
    if unknown:
        msg = f"unknown settings fields: {unknown}"
        raise ConfigParseError(msg)

    strategy = data.get("access_strategy")
    if strategy is not None:
        if not isinstance(strategy, str):
            msg = f"'access_strategy' must be a string, got {type(strategy).__name__}"
            raise ConfigParseError(msg)
        if not strategy:
            msg = "'access_strategy' must not be empty"
            raise ConfigParseError(msg)

    return SettingsConfig(access_strategy=strategy)
