"""Tests for the access strategy registry (inrules._registry).

Validates the builder → frozen registry → load_settings pipeline.
"""

from typing import Any

import pytest

from inrules import (
    Registry,
    RegistryBuilder,
    RuleSettings,
    UnknownStrategyError,
    document_access_strategy,
    map_access_strategy,
    parse_settings_config,
    register_core_strategies,
    rule,
    use_map_access_strategy,
)


def _make_registry() -> Registry:
    return register_core_strategies(RegistryBuilder()).build()


class TestRegistryBuilder:
    def test_builder_registers_and_freezes(self) -> None:
        builder = RegistryBuilder()
        builder.strategy("map", map_access_strategy)
        registry = builder.build()

        assert registry.strategy_count == 1
        assert registry.contains_strategy("map")
        assert not registry.contains_strategy("document")

    def test_build_copies_registrations(self) -> None:
        builder = RegistryBuilder().strategy("map", map_access_strategy)
        registry = builder.build()
        builder.strategy("document", document_access_strategy)
        assert registry.strategy_count == 1

    def test_core_registration(self) -> None:
        registry = _make_registry()
        assert registry.strategy_names() == ["document", "map"]
        assert registry.strategy("document") is document_access_strategy

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError):
            RegistryBuilder().strategy("bad", "map")  # type: ignore[arg-type]

    def test_custom_strategy(self) -> None:
        def attr_strategy(key: str, container: Any) -> Any:
            return getattr(container, key)

        registry = RegistryBuilder().strategy("attr", attr_strategy).build()
        assert registry.strategy("attr") is attr_strategy


class TestLoadSettings:
    def test_named_strategy(self) -> None:
        registry = _make_registry()
        settings = registry.load_settings(parse_settings_config({"access_strategy": "map"}))
        assert settings == RuleSettings(access_strategy=map_access_strategy)

    def test_no_strategy_defers_to_default(self) -> None:
        registry = _make_registry()
        settings = registry.load_settings(parse_settings_config({}))
        assert settings.access_strategy is None

    def test_unknown_strategy(self) -> None:
        registry = _make_registry()
        config = parse_settings_config({"access_strategy": "yaml"})
        with pytest.raises(UnknownStrategyError) as exc:
            registry.load_settings(config)
        assert exc.value.name == "yaml"
        assert exc.value.available == ["document", "map"]
        assert "registered: document, map" in str(exc.value)

    def test_unknown_strategy_empty_registry(self) -> None:
        with pytest.raises(UnknownStrategyError, match="no strategies are registered"):
            Registry().strategy("map")

    def test_loaded_settings_drive_rule(self) -> None:
        registry = _make_registry()
        settings = registry.load_settings(parse_settings_config({"access_strategy": "document"}))
        r = rule(
            "is search",
            lambda r: r.given(lambda g: g.any_str("path"))
            .expect(lambda p: p.endswith("/search"))
            .then_return(lambda _: "search")
            .otherwise_return(lambda _: "other"),
            settings=settings,
        )
        use_map_access_strategy()
        assert r('{"path": "/api/v1/search"}') == "search"
        assert r('{"path": "/api/v1/user"}') == "other"
