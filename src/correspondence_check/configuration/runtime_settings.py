"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class CheckKind(str, Enum):
    """Check operations a suite case can request."""

    CONTAINS = "contains"
    CONTAINS_ANY = "contains_any"
    CONTAINS_AT_LEAST = "contains_at_least"
    CONTAINS_EXACTLY = "contains_exactly"
    CONTAINS_NONE = "contains_none"
    DOES_NOT_CONTAIN = "does_not_contain"
    CONTAINS_ENTRY = "contains_entry"
    DOES_NOT_CONTAIN_ENTRY = "does_not_contain_entry"
    CONTAINS_EXACTLY_ENTRIES = "contains_exactly_entries"
    CONTAINS_AT_LEAST_ENTRIES = "contains_at_least_entries"

    @property
    def checks_map(self) -> bool:
        return self in _MAP_KINDS

    @property
    def supports_order(self) -> bool:
        return self in _ORDERED_KINDS

    @property
    def supports_pairing(self) -> bool:
        return self in _PAIRING_KINDS

    @property
    def takes_single_expected(self) -> bool:
        return self in (CheckKind.CONTAINS, CheckKind.DOES_NOT_CONTAIN)


_MAP_KINDS = frozenset(
    {
        CheckKind.CONTAINS_ENTRY,
        CheckKind.DOES_NOT_CONTAIN_ENTRY,
        CheckKind.CONTAINS_EXACTLY_ENTRIES,
        CheckKind.CONTAINS_AT_LEAST_ENTRIES,
    }
)
_ORDERED_KINDS = frozenset(
    {
        CheckKind.CONTAINS_AT_LEAST,
        CheckKind.CONTAINS_EXACTLY,
        CheckKind.CONTAINS_EXACTLY_ENTRIES,
        CheckKind.CONTAINS_AT_LEAST_ENTRIES,
    }
)
_PAIRING_KINDS = frozenset(
    {
        CheckKind.CONTAINS,
        CheckKind.CONTAINS_ANY,
        CheckKind.CONTAINS_AT_LEAST,
        CheckKind.CONTAINS_EXACTLY,
    }
)


@dataclass(frozen=True)
class RelationConfig:
    """Built-in relation selected by name."""

    name: str = "equality"
    tolerance: float | None = None


@dataclass(frozen=True)
class CheckSettings:
    """Suite-wide defaults."""

    fail_on_relation_exceptions: bool = True
    relation: RelationConfig = field(default_factory=RelationConfig)


@dataclass(frozen=True)
class CheckCase:  # pylint: disable=too-many-instance-attributes
    """One check to evaluate, with its inputs."""

    case_id: str
    check: CheckKind
    relation: RelationConfig
    actual: Any
    expected: Any
    in_order: bool = False
    pair_by: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class CheckSuite:
    """Top-level check suite aggregate."""

    path: Path
    settings: CheckSettings
    cases: tuple[CheckCase, ...]

    def case(self, case_id: str) -> CheckCase:
        for candidate in self.cases:
            if candidate.case_id == case_id:
                return candidate
        raise KeyError(case_id)
