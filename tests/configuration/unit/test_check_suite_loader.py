"""Check suite loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from correspondence_check.configuration.loader import ConfigurationError, load_check_suite
from correspondence_check.configuration.runtime_settings import CheckKind, RelationConfig


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def _write_suite(tmp_path: Path, suite: dict) -> Path:
    return _write_file(tmp_path / "suite.json", json.dumps(suite))


def _case(**overrides) -> dict:
    case = {"id": "case-1", "check": "contains_exactly", "actual": [1, 2], "expected": [2, 1]}
    case.update(overrides)
    return case


def test_loads_yaml_suite_with_defaults(tmp_path: Path) -> None:
    suite_path = _write_file(
        tmp_path / "suite.yaml",
        """
cases:
  - id: exact-ints
    check: contains_exactly
    relation: {name: parses_to_integer}
    actual: ["+64", "+128"]
    expected: [64, 128]
  - id: 7
    check: contains_entry
    actual: {jan: 1}
    expected: [jan, 1]
""",
    )

    suite = load_check_suite(suite_path)

    assert suite.path == suite_path
    assert suite.settings.fail_on_relation_exceptions is True
    assert suite.settings.relation == RelationConfig(name="equality")
    first, second = suite.cases
    assert first.case_id == "exact-ints"
    assert first.check is CheckKind.CONTAINS_EXACTLY
    assert first.relation == RelationConfig(name="parses_to_integer")
    assert first.in_order is False
    assert first.actual == ["+64", "+128"]
    assert second.case_id == "7"
    assert second.relation == RelationConfig(name="equality")
    assert suite.case("7") is second


def test_settings_relation_is_the_default_for_cases(tmp_path: Path) -> None:
    suite_path = _write_suite(
        tmp_path,
        {
            "settings": {
                "fail_on_relation_exceptions": False,
                "relation": {"name": "within_tolerance", "tolerance": 0.25},
            },
            "cases": [_case(in_order=True, pair_by="id", description="scores")],
        },
    )

    suite = load_check_suite(suite_path)

    assert suite.settings.fail_on_relation_exceptions is False
    case = suite.cases[0]
    assert case.relation == RelationConfig(name="within_tolerance", tolerance=0.25)
    assert case.in_order is True
    assert case.pair_by == "id"
    assert case.description == "scores"


def test_relation_may_be_given_by_name_only(tmp_path: Path) -> None:
    suite = load_check_suite(_write_suite(tmp_path, {"cases": [_case(relation="equality")]}))

    assert suite.cases[0].relation == RelationConfig(name="equality")


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_check_suite(tmp_path / "absent.yaml")


def test_invalid_yaml_is_reported(tmp_path: Path) -> None:
    suite_path = _write_file(tmp_path / "suite.yaml", "cases: [\n")

    with pytest.raises(ConfigurationError, match="Failed to parse"):
        load_check_suite(suite_path)


@pytest.mark.parametrize(
    ("suite", "message"),
    [
        ([], "root must be a mapping"),
        ({}, "'cases' must be a list"),
        ({"cases": []}, "at least one case"),
        ({"cases": ["not a case"]}, r"'cases\[0\]' must be a mapping"),
        ({"cases": [_case(id="")]}, r"cases\[0\]\.id must not be empty"),
        ({"cases": [_case(check="contains_most")]}, r"cases\[0\]\.check 'contains_most'"),
        ({"cases": [_case(), _case()]}, r"cases\[1\]\.id 'case-1' is not unique"),
        ({"cases": [_case(relation={"name": "approx"})]}, "Unknown relation 'approx'"),
        (
            {"cases": [_case(relation={"name": "within_tolerance"})]},
            "requires a tolerance",
        ),
        (
            {"cases": [_case(relation={"name": "within_tolerance", "tolerance": "x"})]},
            r"cases\[0\]\.relation\.tolerance must be a number",
        ),
        (
            {"cases": [_case(relation={"name": "within_tolerance", "tolerance": -1})]},
            "non-negative",
        ),
        ({"cases": [_case(in_order="yes")]}, r"cases\[0\]\.in_order must be true or false"),
        (
            {"cases": [_case(check="contains_any", in_order=True)]},
            "in_order is not supported by check 'contains_any'",
        ),
        (
            {"cases": [_case(check="contains_none", pair_by="id")]},
            "pair_by is not supported by check 'contains_none'",
        ),
        ({"cases": [{"id": "a", "check": "contains", "actual": []}]}, "expected is required"),
        ({"cases": [_case(actual={"a": 1})]}, r"cases\[0\]\.actual must be a list"),
        ({"cases": [_case(expected=3)]}, r"cases\[0\]\.expected must be a list"),
        (
            {"cases": [_case(check="contains_entry", actual=[1], expected=["a", 1])]},
            r"cases\[0\]\.actual must be a mapping",
        ),
        (
            {"cases": [_case(check="contains_entry", actual={}, expected=["a"])]},
            r"cases\[0\]\.expected must be a \[key, value\] pair",
        ),
        (
            {"cases": [_case(check="contains_exactly_entries", actual={}, expected=[["a"]])]},
            r"cases\[0\]\.expected\[0\] must be a \[key, value\] pair",
        ),
        (
            {"cases": [_case(check="contains_entry", actual={}, expected=[[1], 2])]},
            r"cases\[0\]\.expected key must be a scalar value",
        ),
        ({"settings": [], "cases": [_case()]}, "'settings' must be a mapping"),
    ],
)
def test_invalid_suites_are_rejected_with_path(tmp_path: Path, suite, message: str) -> None:
    suite_path = _write_suite(tmp_path, suite)

    with pytest.raises(ConfigurationError, match=message):
        load_check_suite(suite_path)


def test_single_element_checks_accept_any_expected_value(tmp_path: Path) -> None:
    suite_path = _write_suite(
        tmp_path,
        {"cases": [_case(check="contains", expected={"id": 1}), _case(id="b", check="contains")]},
    )

    suite = load_check_suite(suite_path)

    assert suite.cases[0].expected == {"id": 1}
    assert suite.cases[1].expected == [2, 1]
