"""Multiset view tests."""

from __future__ import annotations

from correspondence_check.multisets import ElementGroup, Multiset, group_equivalent_values


def test_multiset_keeps_order_and_original_indices() -> None:
    multiset = Multiset(iter(["b", "a", "b"]))

    assert len(multiset) == 3
    assert multiset.values == ("b", "a", "b")
    assert [entry.original_index for entry in multiset] == [0, 1, 2]
    assert multiset[1] == "a"


def test_values_at_returns_values_in_original_order() -> None:
    multiset = Multiset([10, 20, 30, 40])

    assert multiset.values_at([3, 0, 3]) == (10, 40)


def test_grouped_counts_duplicates_in_first_seen_order() -> None:
    multiset = Multiset([128, 64, 128, 256, 128])

    assert multiset.grouped() == (
        ElementGroup(representative=128, count=3),
        ElementGroup(representative=64, count=1),
        ElementGroup(representative=256, count=1),
    )
    assert multiset.grouped([1, 3]) == (
        ElementGroup(representative=64, count=1),
        ElementGroup(representative=256, count=1),
    )


def test_grouping_handles_unhashable_values() -> None:
    groups = group_equivalent_values([[1], {"a": 1}, [1], {"a": 1}, [2]])

    assert [group.count for group in groups] == [2, 2, 1]
    assert groups[0].representative == [1]


def test_grouping_uses_custom_equivalence_key() -> None:
    groups = group_equivalent_values(["A", "a", "b"], str.lower)

    assert groups == (
        ElementGroup(representative="A", count=2),
        ElementGroup(representative="b", count=1),
    )


def test_empty_multiset() -> None:
    multiset = Multiset([])

    assert len(multiset) == 0
    assert multiset.grouped() == ()


def test_multiset_groups_with_its_equivalence_key() -> None:
    multiset = Multiset(["A", "b", "a"], str.lower)

    assert multiset.equivalence_key("Q") == "q"
    assert multiset.grouped([0, 2]) == (ElementGroup(representative="A", count=2),)


def test_natural_equality_merges_equal_numbers_of_different_types() -> None:
    groups = group_equivalent_values([1, 1.0, True])

    assert groups == (ElementGroup(representative=1, count=3),)
