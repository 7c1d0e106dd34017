"""inrules — declarative given/when/then/otherwise rules.

All public types are exported from this module for flat imports:

    from inrules import rule, rules, use_map_access_strategy
"""

__version__ = "0.1.0"

# Access strategies — see inrules._access for details
from inrules._access import (
    document_access_strategy,
    get_default_access_strategy,
    map_access_strategy,
    set_default_access_strategy,
    use_document_access_strategy,
    use_map_access_strategy,
)

# Coercion and errors
from inrules._coerce import (
    TRUE_TOKENS,
    MissingKeyError,
    NumericParseError,
    RuleError,
    TypeMismatchError,
    to_bool,
    to_double,
    to_float,
    to_int,
    to_long,
    to_short,
    to_str,
)

# Settings and config types
from inrules._config import (
    ConfigParseError,
    RuleSettings,
    SettingsConfig,
    configure,
    parse_settings_config,
)
from inrules._given import GivenExpression, NestedGivenExpression

# Predicates
from inrules._predicate import And, Leaf, Or, Predicate, predicate_depth

# Registry
from inrules._registry import (
    Registry,
    RegistryBuilder,
    UnknownStrategyError,
    register_core_strategies,
)

# Rules and the builder chain
from inrules._rule import (
    OtherwiseExpression,
    Rule,
    RuleDefinition,
    RuleDefinitionError,
    RuleExpression,
    ThenExpression,
    WhenExpression,
    rule,
    rules,
)

from inrules._types import AccessStrategy

__all__ = [
    # Rules
    "Rule",
    "RuleDefinition",
    "rule",
    "rules",
    # Builder stages
    "RuleExpression",
    "WhenExpression",
    "ThenExpression",
    "OtherwiseExpression",
    # Given expressions
    "GivenExpression",
    "NestedGivenExpression",
    # Predicates
    "Leaf",
    "And",
    "Or",
    "Predicate",
    "predicate_depth",
    # Access strategies
    "AccessStrategy",
    "map_access_strategy",
    "document_access_strategy",
    "get_default_access_strategy",
    "set_default_access_strategy",
    "use_map_access_strategy",
    "use_document_access_strategy",
    # Coercion
    "TRUE_TOKENS",
    "to_str",
    "to_short",
    "to_int",
    "to_long",
    "to_float",
    "to_double",
    "to_bool",
    # Settings and config
    "RuleSettings",
    "SettingsConfig",
    "configure",
    "parse_settings_config",
    # Registry
    "RegistryBuilder",
    "Registry",
    "register_core_strategies",
    # Errors
    "RuleError",
    "MissingKeyError",
    "TypeMismatchError",
    "NumericParseError",
    "RuleDefinitionError",
    "ConfigParseError",
    "UnknownStrategyError",
]
