"""Behavioural properties of the correspondence checks."""

from __future__ import annotations

import random
from itertools import permutations

from correspondence_check import (
    contains_at_least_elements_in,
    contains_exactly_elements_in,
    contains_none_in,
    from_predicate,
    tolerance,
)
from correspondence_check.matching import QueryMode, match_correspondence
from correspondence_check.multisets import Multiset
from correspondence_check.relations import build_relation


def _parses():
    return build_relation("parses_to_integer")


def _brute_force_exact(actual: list[int], expected: list[int], relation) -> bool:
    if len(actual) != len(expected):
        return False
    return any(
        all(
            relation.test(actual[index], value).matched
            for index, value in zip(order, expected, strict=True)
        )
        for order in permutations(range(len(actual)))
    )


def test_exact_correctness_for_parsed_integers() -> None:
    result = contains_exactly_elements_in(
        ["+64", "+128", "+256", "0x80"], [64, 128, 256, 128], _parses()
    )

    assert result.passed
    assert result.in_order().passed


def test_missing_report_names_exactly_the_unmatched_expected_element() -> None:
    result = contains_exactly_elements_in(
        ["+64", "+128", "0x40", "0x80"], [64, 128, 256, 128], _parses()
    )

    assert result.diagnostic is not None
    assert result.diagnostic.values_of("missing (1)") == ("256",)
    assert not any(key.startswith("unexpected") for key in result.diagnostic.keys)


def test_duplicate_counting() -> None:
    result = contains_exactly_elements_in([], [4, 4, 4])

    assert result.diagnostic is not None
    assert result.diagnostic.value_of("missing (3)") == "4 [3 copies]"


def test_subset_checks_ignore_extras() -> None:
    assert contains_at_least_elements_in(["+1", "+5", "+2", "x"], [2, 1], _parses()).passed


def test_non_greedy_match_over_all_permutations() -> None:
    expected = [1.0, 1.1, 1.2]
    actual = [99.999, 1.05, 99.999, 1.15, 0.95, 99.999]
    relation = tolerance(0.1)

    for actual_order in permutations(actual):
        for expected_order in permutations(expected):
            assert contains_at_least_elements_in(actual_order, expected_order, relation).passed


def test_raising_pair_is_treated_as_absent_and_surfaced() -> None:
    def _compare(actual, expected) -> bool:
        if actual == "boom":
            raise ValueError("cannot compare boom")
        return actual == expected

    relation = from_predicate(_compare, "equals")

    result = contains_none_in(["boom", "a"], ["b"], relation)

    assert result.passed is False
    assert result.diagnostic is not None
    assert result.diagnostic.value_of("first exception").startswith(
        "compare(boom, b) threw ValueError: cannot compare boom"
    )


def test_order_round_trip_for_permuted_actual() -> None:
    expected = [3, 1, 2]
    for actual in permutations(expected):
        result = contains_exactly_elements_in(list(actual), expected)
        assert result.passed
        assert result.in_order().passed is (list(actual) == expected)


def _congruent(actual: int, expected: int) -> bool:
    return actual % 3 == expected % 3


def test_exact_outcome_agrees_with_brute_force_on_random_inputs() -> None:
    rng = random.Random(7)
    relation = from_predicate(_congruent, "is congruent modulo 3 to")
    for _ in range(200):
        actual = [rng.randint(0, 8) for _ in range(rng.randint(0, 5))]
        expected = [rng.randint(0, 8) for _ in range(rng.randint(0, 5))]

        outcome = match_correspondence(
            Multiset(actual), Multiset(expected), relation, QueryMode.EXACT
        )

        assert outcome.succeeded is _brute_force_exact(actual, expected, relation)
