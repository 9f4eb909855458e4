"""Correspondence matcher tests."""

from __future__ import annotations

from correspondence_check.matching import (
    ExceptionCategory,
    ExceptionStore,
    FailureStage,
    QueryMode,
    match_correspondence,
)
from correspondence_check.multisets import Multiset
from correspondence_check.relations import equality, from_predicate, tolerance


def _linked(edges: set[tuple[str, str]]):
    return from_predicate(lambda actual, expected: (actual, expected) in edges, "is linked to")


def _counting_equality(calls: list[tuple[object, object]]):
    def _compare(actual, expected) -> bool:
        calls.append((actual, expected))
        return actual == expected

    return from_predicate(_compare, "is counted equal to")


def test_any_mode_stops_at_first_corresponding_pair() -> None:
    calls: list[tuple[object, object]] = []

    outcome = match_correspondence(
        Multiset([1, 2, 3]), Multiset([2]), _counting_equality(calls), QueryMode.ANY
    )

    assert outcome.succeeded is True
    assert outcome.pairing.pairs == ((0, 1),)
    assert calls == [(1, 2), (2, 2)]


def test_any_mode_fails_without_correspondence() -> None:
    outcome = match_correspondence(Multiset([1]), Multiset([2, 3]), equality(), QueryMode.ANY)

    assert outcome.succeeded is False
    assert outcome.failure_stage is FailureStage.NO_CORRESPONDENCE


def test_none_mode_scans_every_pair() -> None:
    calls: list[tuple[object, object]] = []

    outcome = match_correspondence(
        Multiset([1, 2, 3]), Multiset([4, 2]), _counting_equality(calls), QueryMode.NONE
    )

    assert outcome.succeeded is False
    assert outcome.failure_stage is FailureStage.CORRESPONDENCE_FOUND
    assert len(calls) == 6
    assert outcome.candidates.by_expected == ((), (1,))


def test_exact_with_empty_expected_and_non_empty_actual_fails_early() -> None:
    outcome = match_correspondence(Multiset(["a", "b"]), Multiset([]), equality(), QueryMode.EXACT)

    assert outcome.succeeded is False
    assert outcome.failure_stage is FailureStage.EXPECTED_EMPTY
    assert outcome.extra_actual == (0, 1)


def test_empty_inputs_pass_exact_and_subset() -> None:
    for mode in (QueryMode.EXACT, QueryMode.ALL_INTO_SUBSET):
        assert match_correspondence(Multiset([]), Multiset([]), equality(), mode).succeeded


def test_candidate_stage_reports_elements_without_edges() -> None:
    outcome = match_correspondence(
        Multiset([64, 128, 999]), Multiset([64, 256, 128]), equality(), QueryMode.EXACT
    )

    assert outcome.succeeded is False
    assert outcome.failure_stage is FailureStage.CANDIDATES
    assert outcome.missing_expected == (1,)
    assert outcome.extra_actual == (2,)


def test_subset_mode_ignores_actual_elements_without_edges() -> None:
    outcome = match_correspondence(
        Multiset([5, 64, 7, 128]), Multiset([128, 64]), equality(), QueryMode.ALL_INTO_SUBSET
    )

    assert outcome.succeeded is True
    assert outcome.pairing.as_dict() == {0: 3, 1: 1}


def test_matching_stage_reports_elements_left_unpaired() -> None:
    relation = _linked({("x", "p"), ("x", "q"), ("x", "r"), ("y", "p"), ("z", "p")})

    outcome = match_correspondence(
        Multiset(["x", "y", "z"]), Multiset(["p", "q", "r"]), relation, QueryMode.EXACT
    )

    assert outcome.succeeded is False
    assert outcome.failure_stage is FailureStage.MATCHING
    assert outcome.pairing.as_dict() == {0: 1, 1: 0}
    assert outcome.missing_expected == (2,)
    assert outcome.extra_actual == (2,)


def test_non_greedy_tolerance_match_is_found() -> None:
    outcome = match_correspondence(
        Multiset([99.999, 1.05, 99.999, 1.15, 0.95, 99.999]),
        Multiset([1.0, 1.1, 1.2]),
        tolerance(0.1),
        QueryMode.ALL_INTO_SUBSET,
    )

    assert outcome.succeeded is True
    assert len(outcome.pairing) == 3


def test_raising_pairs_are_absent_and_recorded() -> None:
    store = ExceptionStore()

    outcome = match_correspondence(
        Multiset(["1.0", 1.0]), Multiset([1.0]), tolerance(0.1), QueryMode.EXACT, store
    )

    assert outcome.succeeded is False
    assert outcome.extra_actual == (0,)
    record = store.first(ExceptionCategory.COMPARE)
    assert record is not None
    assert record.method_name == "compare"
    assert record.arguments == ("1.0", 1.0)
    assert isinstance(record.exception, TypeError)
    assert outcome.exceptions is store
