"""Order validation tests."""

from __future__ import annotations

import pytest
from correspondence_check.matching import (
    CandidateEdges,
    Pairing,
    QueryMode,
    match_correspondence,
)
from correspondence_check.multisets import Multiset
from correspondence_check.ordering import (
    OrderValidationError,
    find_order_preserving_pairing,
    is_order_preserving,
    validate_order,
)
from correspondence_check.relations import build_relation, equality


def _outcome(actual: list, expected: list, mode: QueryMode, relation=None):
    return match_correspondence(
        Multiset(actual), Multiset(expected), relation or equality(), mode
    )


def test_is_order_preserving() -> None:
    assert is_order_preserving(Pairing(pairs=((0, 0), (1, 2), (2, 5))))
    assert not is_order_preserving(Pairing(pairs=((0, 2), (1, 1))))
    assert is_order_preserving(Pairing())


def test_earliest_fit_finds_increasing_pairing() -> None:
    candidates = CandidateEdges(by_expected=((1, 3), (1, 2), (0, 3)), by_actual=((), (), (), ()))

    assert find_order_preserving_pairing(candidates) == Pairing(pairs=((0, 1), (1, 2), (2, 3)))


def test_earliest_fit_returns_none_when_impossible() -> None:
    candidates = CandidateEdges(by_expected=((1,), (0,)), by_actual=((1,), (0,)))

    assert find_order_preserving_pairing(candidates) is None


def test_exact_match_with_crossed_maximum_matching_is_still_in_order() -> None:
    outcome = _outcome(
        ["+64", "+128", "+256", "0x80"],
        [64, 128, 256, 128],
        QueryMode.EXACT,
        build_relation("parses_to_integer"),
    )
    assert outcome.succeeded
    assert not is_order_preserving(outcome.pairing)

    check = validate_order(outcome)

    assert check.in_order is True
    assert check.pairing.as_dict() == {0: 0, 1: 1, 2: 2, 3: 3}


def test_permuted_exact_match_is_out_of_order() -> None:
    outcome = _outcome([128, 64], [64, 128], QueryMode.EXACT)

    check = validate_order(outcome)

    assert outcome.succeeded is True
    assert check.in_order is False


def test_subset_order_ignores_extra_actual_elements() -> None:
    assert validate_order(_outcome([1, 9, 2], [1, 2], QueryMode.ALL_INTO_SUBSET)).in_order
    assert not validate_order(_outcome([2, 9, 1], [1, 2], QueryMode.ALL_INTO_SUBSET)).in_order


def test_order_cannot_be_checked_for_failed_or_unordered_outcomes() -> None:
    with pytest.raises(OrderValidationError):
        validate_order(_outcome([1], [2], QueryMode.EXACT))
    with pytest.raises(OrderValidationError):
        validate_order(_outcome([1], [1], QueryMode.ANY))
