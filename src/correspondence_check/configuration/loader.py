"""Check suite loader service."""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from correspondence_check.relations import build_relation

from .runtime_settings import CheckCase, CheckKind, CheckSettings, CheckSuite, RelationConfig

_KNOWN_CHECKS = ", ".join(kind.value for kind in CheckKind)


class ConfigurationError(Exception):
    """Raised when the check suite file is invalid."""


def load_check_suite(suite_path: Path | str) -> CheckSuite:
    """Load and validate a check suite file."""
    path = Path(suite_path)
    if not path.exists():
        raise ConfigurationError(f"Check suite file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse check suite file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Check suite root must be a mapping.")

    settings = _parse_settings_section(parsed.get("settings"))
    cases = _parse_cases_section(parsed.get("cases"), settings)
    return CheckSuite(path=path, settings=settings, cases=cases)


def _parse_settings_section(value: Any) -> CheckSettings:
    if value is None:
        return CheckSettings()
    section = _require_mapping(value, "settings")
    fail_on_relation_exceptions = _optional_bool(
        section.get("fail_on_relation_exceptions"),
        "settings.fail_on_relation_exceptions",
        default=True,
    )
    relation_value = section.get("relation")
    relation = (
        RelationConfig()
        if relation_value is None
        else _parse_relation(relation_value, "settings.relation")
    )
    return CheckSettings(fail_on_relation_exceptions=fail_on_relation_exceptions, relation=relation)


def _parse_cases_section(value: Any, settings: CheckSettings) -> tuple[CheckCase, ...]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigurationError("Check suite section 'cases' must be a list.")
    if not value:
        raise ConfigurationError("Check suite section 'cases' must contain at least one case.")

    cases: list[CheckCase] = []
    seen_ids: set[str] = set()
    for index, raw_case in enumerate(value):
        case = _parse_case(raw_case, f"cases[{index}]", settings)
        if case.case_id in seen_ids:
            raise ConfigurationError(f"cases[{index}].id '{case.case_id}' is not unique.")
        seen_ids.add(case.case_id)
        cases.append(case)
    return tuple(cases)


def _parse_case(value: Any, label: str, settings: CheckSettings) -> CheckCase:
    section = _require_mapping(value, label)
    case_id = _require_non_empty_string(_stringify_id(section.get("id")), f"{label}.id")
    check = _parse_check_kind(section.get("check"), f"{label}.check")

    relation_value = section.get("relation")
    relation = (
        settings.relation
        if relation_value is None
        else _parse_relation(relation_value, f"{label}.relation")
    )

    in_order = _optional_bool(section.get("in_order"), f"{label}.in_order", default=False)
    if in_order and not check.supports_order:
        raise ConfigurationError(f"{label}.in_order is not supported by check '{check.value}'.")

    pair_by = _optional_string(section.get("pair_by"), f"{label}.pair_by")
    if pair_by is not None and not check.supports_pairing:
        raise ConfigurationError(f"{label}.pair_by is not supported by check '{check.value}'.")

    for required in ("actual", "expected"):
        if required not in section:
            raise ConfigurationError(f"{label}.{required} is required.")
    actual = section["actual"]
    expected = section["expected"]
    if check.checks_map:
        _validate_map_inputs(check, actual, expected, label)
    else:
        _validate_iterable_inputs(check, actual, expected, label)

    return CheckCase(
        case_id=case_id,
        check=check,
        relation=relation,
        actual=actual,
        expected=expected,
        in_order=in_order,
        pair_by=pair_by,
        description=_optional_string(section.get("description"), f"{label}.description"),
    )


def _parse_check_kind(value: Any, field_name: str) -> CheckKind:
    name = _require_non_empty_string(value, field_name)
    try:
        return CheckKind(name)
    except ValueError as exc:
        raise ConfigurationError(
            f"{field_name} '{name}' is not a known check. Known checks: {_KNOWN_CHECKS}."
        ) from exc


def _parse_relation(value: Any, label: str) -> RelationConfig:
    if isinstance(value, str):
        value = {"name": value}
    section = _require_mapping(value, label)
    name = _require_non_empty_string(section.get("name"), f"{label}.name")
    tolerance_value = _optional_number(section.get("tolerance"), f"{label}.tolerance")
    try:
        build_relation(name, tolerance_value=tolerance_value)
    except ValueError as exc:
        raise ConfigurationError(f"{label}: {exc}") from exc
    return RelationConfig(name=name, tolerance=tolerance_value)


def _validate_iterable_inputs(check: CheckKind, actual: Any, expected: Any, label: str) -> None:
    _require_list(actual, f"{label}.actual")
    if not check.takes_single_expected:
        _require_list(expected, f"{label}.expected")


def _validate_map_inputs(check: CheckKind, actual: Any, expected: Any, label: str) -> None:
    if not isinstance(actual, Mapping):
        raise ConfigurationError(f"{label}.actual must be a mapping.")
    if check in (CheckKind.CONTAINS_ENTRY, CheckKind.DOES_NOT_CONTAIN_ENTRY):
        _require_pair(expected, f"{label}.expected")
        return
    if isinstance(expected, Mapping):
        return
    _require_list(expected, f"{label}.expected")
    for index, entry in enumerate(expected):
        _require_pair(entry, f"{label}.expected[{index}]")


def _require_list(value: Any, field_name: str) -> Sequence[Any]:
    if not isinstance(value, list):
        raise ConfigurationError(f"{field_name} must be a list.")
    return value


def _require_pair(value: Any, field_name: str) -> None:
    if not isinstance(value, list) or len(value) != 2:
        raise ConfigurationError(f"{field_name} must be a [key, value] pair.")
    if not isinstance(value[0], Hashable):
        raise ConfigurationError(f"{field_name} key must be a scalar value.")


def _stringify_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Check suite section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, *, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _optional_number(value: Any, field_name: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"{field_name} must be a number.")
    return float(value)
