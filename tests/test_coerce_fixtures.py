"""Coercion conformance tests.

Loads the YAML tables from tests/fixtures/ and runs every case through a
GivenExpression, either on the whole argument (coercion.yaml) or on a
field looked up through an explicit access strategy (keyed.yaml).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

import inrules
from inrules import GivenExpression, document_access_strategy, map_access_strategy

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

_STRATEGIES = {"map": map_access_strategy, "document": document_access_strategy}


@dataclass
class CoercionCase:
    """A single coercion case from a fixture file."""

    fixture_name: str
    case_name: str
    target: str
    input: Any
    key: str | None
    strategy: str | None
    expect: Any
    error: str | None


def _load(path: Path) -> list[CoercionCase]:
    cases: list[CoercionCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            for case in doc["cases"]:
                keyed = "strategy" in doc
                cases.append(
                    CoercionCase(
                        fixture_name=doc["name"],
                        case_name=str(case["name"]),
                        target=case.get("target", doc.get("target")),
                        input=doc["container"] if keyed else case["input"],
                        key=case.get("key"),
                        strategy=doc.get("strategy"),
                        expect=case.get("expect"),
                        error=case.get("error"),
                    )
                )
    return cases


def _coerce(case: CoercionCase) -> Any:
    given = GivenExpression(case.input)
    method = f"any_{case.target}"
    if case.key is None:
        return getattr(given, method)()
    nested = given.using(_STRATEGIES[case.strategy])
    return getattr(nested, method)(case.key)


_whole_cases = _load(FIXTURES_DIR / "coercion.yaml")
_keyed_cases = _load(FIXTURES_DIR / "keyed.yaml")


def _case_id(case: CoercionCase) -> str:
    return f"{case.fixture_name}::{case.case_name}"


@pytest.mark.parametrize("case", _whole_cases, ids=[_case_id(c) for c in _whole_cases])
def test_whole_argument_coercion(case: CoercionCase) -> None:
    _check(case)


@pytest.mark.parametrize("case", _keyed_cases, ids=[_case_id(c) for c in _keyed_cases])
def test_keyed_coercion(case: CoercionCase) -> None:
    _check(case)


def _check(case: CoercionCase) -> None:
    if case.error is not None:
        with pytest.raises(getattr(inrules, case.error)):
            _coerce(case)
        return
    actual = _coerce(case)
    assert actual == case.expect, (
        f"Fixture '{case.fixture_name}' case '{case.case_name}': "
        f"expected {case.expect!r}, got {actual!r}"
    )
    assert type(actual) is type(case.expect)


def test_fixtures_loaded() -> None:
    assert len(_whole_cases) > 30
    assert len(_keyed_cases) > 15
