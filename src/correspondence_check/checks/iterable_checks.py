"""Correspondence checks over iterables."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import partial
from typing import Any

from correspondence_check.diagnostics import (
    Diagnostic,
    IterableCheckContext,
    KeyPairing,
    additional_info_facts,
    describe_exception_failure,
    describe_iterable_failure,
    describe_order_failure,
)
from correspondence_check.matching import (
    ExceptionStore,
    MatchOutcome,
    QueryMode,
    match_correspondence,
)
from correspondence_check.multisets import EquivalenceKey, Multiset
from correspondence_check.ordering import validate_order
from correspondence_check.relations import Relation, equality

from .check_contracts import CheckInputError, CheckResult

_LOGGER = logging.getLogger(__name__)

_ORDERED_MODES = (QueryMode.EXACT, QueryMode.ALL_INTO_SUBSET)


def pairing_by(actual_key_function, expected_key_function=None) -> KeyPairing:
    """Pair unmatched elements by key in failure diagnostics.

    `expected_key_function` defaults to `actual_key_function`. Pairing never changes whether a
    check passes.

    The checks that accept `pairing` also accept `equivalence_key`, which decides which unmatched
    elements are counted as copies of one another. It defaults to natural equality and is never
    the relation.
    """
    resolved_expected = (
        expected_key_function if expected_key_function is not None else actual_key_function
    )
    for name, function in (
        ("actual_key_function", actual_key_function),
        ("expected_key_function", resolved_expected),
    ):
        if not callable(function):
            raise CheckInputError.with_message(
                f"could not perform pairing_by because {name} is not callable"
            )
    return KeyPairing(
        actual_key_function=actual_key_function,
        expected_key_function=resolved_expected,
    )


def contains(
    actual: Iterable[Any],
    expected_element: Any,
    relation: Relation | None = None,
    *,
    pairing: KeyPairing | None = None,
    equivalence_key: EquivalenceKey | None = None,
    fail_on_relation_exceptions: bool = True,
) -> CheckResult:
    """Check that some actual element corresponds to `expected_element`."""
    return _run_check(
        "contains",
        actual,
        [expected_element],
        relation,
        QueryMode.ANY,
        pairing=pairing,
        equivalence_key=equivalence_key,
        single_expected=True,
        fail_on_relation_exceptions=fail_on_relation_exceptions,
    )


def does_not_contain(
    actual: Iterable[Any],
    excluded_element: Any,
    relation: Relation | None = None,
    *,
    fail_on_relation_exceptions: bool = True,
) -> CheckResult:
    """Check that no actual element corresponds to `excluded_element`."""
    return _run_check(
        "does_not_contain",
        actual,
        [excluded_element],
        relation,
        QueryMode.NONE,
        single_expected=True,
        fail_on_relation_exceptions=fail_on_relation_exceptions,
    )


def contains_any_in(
    actual: Iterable[Any],
    expected: Iterable[Any],
    relation: Relation | None = None,
    *,
    pairing: KeyPairing | None = None,
    equivalence_key: EquivalenceKey | None = None,
    fail_on_relation_exceptions: bool = True,
) -> CheckResult:
    """Check that at least one actual element corresponds to some expected element."""
    return _run_check(
        "contains_any_in",
        actual,
        expected,
        relation,
        QueryMode.ANY,
        pairing=pairing,
        equivalence_key=equivalence_key,
        fail_on_relation_exceptions=fail_on_relation_exceptions,
    )


def contains_at_least_elements_in(
    actual: Iterable[Any],
    expected: Iterable[Any],
    relation: Relation | None = None,
    *,
    pairing: KeyPairing | None = None,
    equivalence_key: EquivalenceKey | None = None,
    fail_on_relation_exceptions: bool = True,
) -> CheckResult:
    """Check that every expected element pairs with a distinct actual element."""
    return _run_check(
        "contains_at_least_elements_in",
        actual,
        expected,
        relation,
        QueryMode.ALL_INTO_SUBSET,
        pairing=pairing,
        equivalence_key=equivalence_key,
        fail_on_relation_exceptions=fail_on_relation_exceptions,
    )


def contains_exactly_elements_in(
    actual: Iterable[Any],
    expected: Iterable[Any],
    relation: Relation | None = None,
    *,
    pairing: KeyPairing | None = None,
    equivalence_key: EquivalenceKey | None = None,
    fail_on_relation_exceptions: bool = True,
) -> CheckResult:
    """Check that actual and expected elements pair up one to one."""
    return _run_check(
        "contains_exactly_elements_in",
        actual,
        expected,
        relation,
        QueryMode.EXACT,
        pairing=pairing,
        equivalence_key=equivalence_key,
        fail_on_relation_exceptions=fail_on_relation_exceptions,
    )


def contains_none_in(
    actual: Iterable[Any],
    excluded: Iterable[Any],
    relation: Relation | None = None,
    *,
    fail_on_relation_exceptions: bool = True,
) -> CheckResult:
    """Check that no actual element corresponds to any excluded element."""
    return _run_check(
        "contains_none_in",
        actual,
        excluded,
        relation,
        QueryMode.NONE,
        fail_on_relation_exceptions=fail_on_relation_exceptions,
    )


def _run_check(
    check_name: str,
    actual: Iterable[Any],
    expected: Iterable[Any],
    relation: Relation | None,
    mode: QueryMode,
    *,
    pairing: KeyPairing | None = None,
    equivalence_key: EquivalenceKey | None = None,
    single_expected: bool = False,
    fail_on_relation_exceptions: bool = True,
) -> CheckResult:
    actual_values = _materialize(actual, check_name, "actual")
    expected_values = _materialize(expected, check_name, "expected")
    if relation is not None and not isinstance(relation, Relation):
        raise CheckInputError.with_message(
            f"could not perform {check_name} because relation is not a Relation"
        )
    if equivalence_key is not None and not callable(equivalence_key):
        raise CheckInputError.with_message(
            f"could not perform {check_name} because equivalence_key is not callable"
        )
    exceptions = ExceptionStore()
    context = IterableCheckContext(
        actual=Multiset(actual_values, equivalence_key),
        expected=Multiset(expected_values, equivalence_key),
        relation=relation or equality(),
        exceptions=exceptions,
        key_pairing=pairing,
        single_expected=single_expected,
    )
    outcome = match_correspondence(
        context.actual, context.expected, context.relation, mode, exceptions
    )
    if not outcome.succeeded:
        _LOGGER.debug("%s failed at stage %s", check_name, outcome.failure_stage)
        return CheckResult(passed=False, diagnostic=describe_iterable_failure(context, outcome))

    notes = None
    if exceptions.has_compare_exceptions:
        if fail_on_relation_exceptions:
            _LOGGER.debug("%s failed because the relation raised", check_name)
            return CheckResult(
                passed=False, diagnostic=describe_exception_failure(context, outcome)
            )
        notes = Diagnostic.of(additional_info_facts(exceptions))

    order_check = partial(_check_order, context, outcome, notes) if mode in _ORDERED_MODES else None
    return CheckResult(
        passed=True,
        pairing=outcome.pairing,
        notes=notes,
        order_check=order_check,
    )


def _check_order(
    context: IterableCheckContext,
    outcome: MatchOutcome,
    notes: Diagnostic | None,
) -> CheckResult:
    order = validate_order(outcome)
    if not order.in_order:
        return CheckResult(passed=False, diagnostic=describe_order_failure(context, outcome))
    return CheckResult(passed=True, pairing=order.pairing, notes=notes)


def _materialize(values: Iterable[Any] | None, check_name: str, side: str) -> tuple[Any, ...]:
    if values is None:
        raise CheckInputError.with_message(
            f"could not perform {check_name} because {side} is None"
        )
    try:
        return tuple(values)
    except TypeError as exc:
        raise CheckInputError.with_message(
            f"could not perform {check_name} because {side} is not iterable"
        ) from exc
