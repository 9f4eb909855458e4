"""Relations between actual elements and expected elements."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from numbers import Real
from typing import Any

BinaryPredicate = Callable[[Any, Any], bool]
DiffFormatter = Callable[[Any, Any], str | None]


@dataclass(frozen=True)
class RelationOutcome:
    """Outcome of testing one actual/expected pair."""

    matched: bool
    error: Exception | None = None


@dataclass(frozen=True)
class DiffOutcome:
    """Outcome of formatting the diff between one actual/expected pair."""

    text: str | None
    error: Exception | None = None


class Relation(ABC):
    """Pluggable binary relation used in place of plain equality.

    Subclasses implement `compare()` and may override `format_diff()`. The matching engine only
    ever calls `test()` and `diff()`, which capture anything raised by those two methods and hand
    it back inside the returned outcome instead of propagating it.

    The relation need not be reflexive, symmetric or transitive, and the engine never mutates it.
    """

    def __init__(self, description: str) -> None:
        self.description = description

    @abstractmethod
    def compare(self, actual: Any, expected: Any) -> bool:
        """Return True when the actual element corresponds to the expected element."""

    def format_diff(self, actual: Any, expected: Any) -> str | None:
        """Describe how a non-corresponding actual element differs from the expected one."""
        del actual, expected
        return None

    @property
    def is_equality(self) -> bool:
        """Return True for the natural-equality relation."""
        return False

    def test(self, actual: Any, expected: Any) -> RelationOutcome:
        """Evaluate the relation for one pair without letting its exceptions escape."""
        try:
            return RelationOutcome(matched=bool(self.compare(actual, expected)))
        except Exception as exc:  # pylint: disable=broad-exception-caught
            return RelationOutcome(matched=False, error=exc)

    def diff(self, actual: Any, expected: Any) -> DiffOutcome:
        """Format the diff for one non-matching pair without letting its exceptions escape."""
        try:
            text = self.format_diff(actual, expected)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            return DiffOutcome(text=None, error=exc)
        return DiffOutcome(text=None if text is None else str(text))

    def formatting_diffs_using(self, formatter: DiffFormatter) -> Relation:
        """Return a relation comparing like this one and formatting diffs with `formatter`."""
        if not callable(formatter):
            raise TypeError("Diff formatter must be callable.")
        return _FormattingDiffs(self, formatter)

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"


class _PredicateRelation(Relation):
    def __init__(self, predicate: BinaryPredicate, description: str) -> None:
        super().__init__(description)
        self._predicate = predicate

    def compare(self, actual: Any, expected: Any) -> bool:
        return self._predicate(actual, expected)


class _TransformingRelation(Relation):
    def __init__(
        self,
        actual_transform: Callable[[Any], Any],
        expected_transform: Callable[[Any], Any],
        description: str,
    ) -> None:
        super().__init__(description)
        self._actual_transform = actual_transform
        self._expected_transform = expected_transform

    def compare(self, actual: Any, expected: Any) -> bool:
        return self._actual_transform(actual) == self._expected_transform(expected)


class _TolerantNumericEquality(Relation):
    def __init__(self, tolerance_value: float) -> None:
        super().__init__(f"is a finite number within {tolerance_value} of")
        self._tolerance = tolerance_value

    def compare(self, actual: Any, expected: Any) -> bool:
        actual_number = _require_real(actual)
        expected_number = _require_real(expected)
        if not (math.isfinite(actual_number) and math.isfinite(expected_number)):
            return False
        return abs(actual_number - expected_number) <= self._tolerance


class _Equality(Relation):
    def __init__(self) -> None:
        super().__init__("is equal to")

    def compare(self, actual: Any, expected: Any) -> bool:
        return actual == expected

    @property
    def is_equality(self) -> bool:
        return True


class _FormattingDiffs(Relation):
    def __init__(self, delegate: Relation, formatter: DiffFormatter) -> None:
        super().__init__(delegate.description)
        self._delegate = delegate
        self._formatter = formatter

    def compare(self, actual: Any, expected: Any) -> bool:
        return self._delegate.compare(actual, expected)

    def format_diff(self, actual: Any, expected: Any) -> str | None:
        return self._formatter(actual, expected)

    @property
    def is_equality(self) -> bool:
        return self._delegate.is_equality


_EQUALITY = _Equality()


def from_predicate(predicate: BinaryPredicate, description: str) -> Relation:
    """Build a relation from a two-argument predicate and a description.

    The description completes the sentence "actual element <description> expected element",
    e.g. ``from_predicate(lambda a, e: a.lower() == e.lower(), "equals (ignoring case)")``.
    """
    if not callable(predicate):
        raise TypeError("Relation predicate must be callable.")
    return _PredicateRelation(predicate, _require_description(description))


def transforming(
    actual_transform: Callable[[Any], Any],
    description: str,
    expected_transform: Callable[[Any], Any] | None = None,
) -> Relation:
    """Build a relation comparing transformed elements with natural equality."""
    if not callable(actual_transform):
        raise TypeError("Actual transform must be callable.")
    if expected_transform is not None and not callable(expected_transform):
        raise TypeError("Expected transform must be callable.")
    return _TransformingRelation(
        actual_transform,
        expected_transform if expected_transform is not None else _identity,
        _require_description(description),
    )


def tolerance(tolerance_value: float) -> Relation:
    """Build a relation accepting finite numbers within `tolerance_value` of each other."""
    if isinstance(tolerance_value, bool) or not isinstance(tolerance_value, Real):
        raise TypeError("Tolerance must be a real number.")
    if not math.isfinite(tolerance_value) or tolerance_value < 0:
        raise ValueError(f"Tolerance must be finite and non-negative, got {tolerance_value}.")
    return _TolerantNumericEquality(tolerance_value)


def equality() -> Relation:
    """Return the natural-equality relation."""
    return _EQUALITY


def _require_real(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"Expected a real number, got {type(value).__name__}.")
    return float(value)


def _require_description(description: str) -> str:
    if not isinstance(description, str) or not description.strip():
        raise ValueError("Relation description must be a non-empty string.")
    return description.strip()


def _identity(value: Any) -> Any:
    return value
