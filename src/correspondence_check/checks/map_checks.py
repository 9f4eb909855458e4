"""Correspondence checks over map entries; keys use natural equality, values the relation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from functools import partial
from typing import Any

from correspondence_check.diagnostics import (
    Diagnostic,
    EntryCheckContext,
    EntryComparison,
    WrongValue,
    additional_info_facts,
    describe_entries_failure,
    describe_entries_order_failure,
    describe_entry_failure,
    describe_excluded_entry_exception,
    describe_excluded_entry_failure,
    render_value,
)
from correspondence_check.matching import ExceptionCategory, ExceptionStore
from correspondence_check.multisets import group_equivalent_values
from correspondence_check.relations import Relation, equality

from .check_contracts import CheckInputError, CheckResult

_LOGGER = logging.getLogger(__name__)

ExpectedEntries = Mapping[Any, Any] | Iterable[tuple[Any, Any]]


def contains_entry(
    actual: Mapping[Any, Any],
    key: Any,
    value: Any,
    relation: Relation | None = None,
) -> CheckResult:
    """Check that `actual` maps `key` to a value corresponding to `value`."""
    context = _context("contains_entry", actual, [(key, value)], relation)
    if key in context.actual:
        if _values_correspond(context, context.actual[key], value):
            return CheckResult(passed=True)
        return CheckResult(passed=False, diagnostic=describe_entry_failure(context, key, value, ()))

    other_keys = [
        other_key
        for other_key, other_value in context.actual.items()
        if _values_correspond(context, other_value, value)
    ]
    return CheckResult(
        passed=False,
        diagnostic=describe_entry_failure(context, key, value, other_keys),
    )


def does_not_contain_entry(
    actual: Mapping[Any, Any],
    key: Any,
    value: Any,
    relation: Relation | None = None,
    *,
    fail_on_relation_exceptions: bool = True,
) -> CheckResult:
    """Check that `actual` does not map `key` to a value corresponding to `value`."""
    context = _context("does_not_contain_entry", actual, [(key, value)], relation)
    if key not in context.actual:
        return CheckResult(passed=True)
    if _values_correspond(context, context.actual[key], value):
        return CheckResult(
            passed=False, diagnostic=describe_excluded_entry_failure(context, key, value)
        )
    if not context.exceptions.has_compare_exceptions:
        return CheckResult(passed=True)
    if fail_on_relation_exceptions:
        return CheckResult(
            passed=False, diagnostic=describe_excluded_entry_exception(context, key, value)
        )
    return CheckResult(
        passed=True, notes=Diagnostic.of(additional_info_facts(context.exceptions, "values"))
    )


def contains_exactly_entries_in(
    actual: Mapping[Any, Any],
    expected: ExpectedEntries,
    relation: Relation | None = None,
) -> CheckResult:
    """Check that `actual` has exactly the expected keys, each with a corresponding value."""
    return _check_entries("contains_exactly_entries_in", actual, expected, relation, exact=True)


def contains_at_least_entries_in(
    actual: Mapping[Any, Any],
    expected: ExpectedEntries,
    relation: Relation | None = None,
) -> CheckResult:
    """Check that `actual` has every expected key, each with a corresponding value."""
    return _check_entries("contains_at_least_entries_in", actual, expected, relation, exact=False)


def _check_entries(
    check_name: str,
    actual: Mapping[Any, Any],
    expected: ExpectedEntries,
    relation: Relation | None,
    *,
    exact: bool,
) -> CheckResult:
    entries = _normalize_entries(check_name, expected)
    context = _context(check_name, actual, entries, relation)
    comparison = _compare_entries(context, exact=exact)
    if comparison.has_differences:
        _LOGGER.debug(
            "%s found %d wrong, %d missing and %d unexpected entries",
            check_name,
            len(comparison.wrong_values),
            len(comparison.missing),
            len(comparison.unexpected),
        )
        return CheckResult(
            passed=False, diagnostic=describe_entries_failure(context, comparison, exact=exact)
        )
    return CheckResult(passed=True, order_check=partial(_check_entry_order, context, exact))


def _compare_entries(context: EntryCheckContext, *, exact: bool) -> EntryComparison:
    wrong_values: list[WrongValue] = []
    missing: list[tuple[Any, Any]] = []
    for key, expected_value in context.expected:
        if key not in context.actual:
            missing.append((key, expected_value))
            continue
        actual_value = context.actual[key]
        if not _values_correspond(context, actual_value, expected_value):
            wrong_values.append(WrongValue(key=key, expected=expected_value, actual=actual_value))

    unexpected: list[tuple[Any, Any]] = []
    if exact:
        expected_keys = {key for key, _ in context.expected}
        unexpected = [
            (key, value) for key, value in context.actual.items() if key not in expected_keys
        ]
    return EntryComparison(
        wrong_values=tuple(wrong_values),
        missing=tuple(missing),
        unexpected=tuple(unexpected),
    )


def _check_entry_order(context: EntryCheckContext, exact: bool) -> CheckResult:
    position_of = {key: position for position, key in enumerate(context.actual)}
    positions = [position_of[key] for key, _ in context.expected]
    if all(earlier < later for earlier, later in zip(positions, positions[1:], strict=False)):
        return CheckResult(passed=True)
    return CheckResult(
        passed=False, diagnostic=describe_entries_order_failure(context, exact=exact)
    )


def _values_correspond(context: EntryCheckContext, actual_value: Any, expected_value: Any) -> bool:
    outcome = context.relation.test(actual_value, expected_value)
    if outcome.error is not None:
        context.exceptions.record(
            ExceptionCategory.COMPARE, "compare", (actual_value, expected_value), outcome.error
        )
    return outcome.matched


def _context(
    check_name: str,
    actual: Mapping[Any, Any],
    entries: list[tuple[Any, Any]],
    relation: Relation | None,
) -> EntryCheckContext:
    if actual is None:
        raise CheckInputError.with_message(f"could not perform {check_name} because actual is None")
    if not isinstance(actual, Mapping):
        raise CheckInputError.with_message(
            f"could not perform {check_name} because actual is not a map"
        )
    for key, _ in entries:
        try:
            hash(key)
        except TypeError as exc:
            raise CheckInputError.with_message(
                f"could not perform {check_name} because expected key {render_value(key)}"
                " is not hashable"
            ) from exc
    return EntryCheckContext(
        actual=actual,
        expected=tuple(entries),
        relation=relation or equality(),
        exceptions=ExceptionStore(),
    )


def _normalize_entries(check_name: str, expected: ExpectedEntries) -> list[tuple[Any, Any]]:
    if expected is None:
        raise CheckInputError.with_message(
            f"could not perform {check_name} because expected is None"
        )
    if isinstance(expected, Mapping):
        return list(expected.items())

    entries: list[tuple[Any, Any]] = []
    for index, entry in enumerate(expected):
        if isinstance(entry, str | bytes) or not isinstance(entry, Iterable):
            raise _malformed_entry(check_name, index)
        pair = tuple(entry)
        if len(pair) != 2:
            raise _malformed_entry(check_name, index)
        entries.append((pair[0], pair[1]))

    duplicates = [
        group for group in group_equivalent_values([key for key, _ in entries]) if group.count > 1
    ]
    if duplicates:
        rendered = ", ".join(
            f"{render_value(group.representative)} x {group.count}" for group in duplicates
        )
        raise CheckInputError.with_message(
            f"Duplicate keys ([{rendered}]) cannot be passed to {check_name}()."
        )
    return entries


def _malformed_entry(check_name: str, index: int) -> CheckInputError:
    return CheckInputError.with_message(
        f"could not perform {check_name} because expected entry #{index + 1}"
        " is not a key/value pair"
    )
