"""Exception store tests."""

from __future__ import annotations

from correspondence_check.matching import ExceptionCategory, ExceptionStore


def test_store_keeps_first_record_and_counts_the_rest() -> None:
    store = ExceptionStore()
    first_error = ValueError("first")

    store.record(ExceptionCategory.COMPARE, "compare", (1, 2), first_error)
    store.record(ExceptionCategory.COMPARE, "compare", (3, 4), ValueError("second"))

    record = store.first(ExceptionCategory.COMPARE)
    assert record is not None
    assert record.exception is first_error
    assert record.arguments == (1, 2)
    assert record.count == 2
    assert store.count(ExceptionCategory.COMPARE) == 2
    assert store.has_compare_exceptions is True


def test_records_are_returned_in_category_order() -> None:
    store = ExceptionStore()
    store.record(ExceptionCategory.FORMAT_DIFF, "format_diff", (1, 2), ValueError("diff"))
    store.record(ExceptionCategory.KEYING, "actual_key_function", (1,), KeyError("key"))

    categories = [record.category for record in store.records()]

    assert categories == [ExceptionCategory.KEYING, ExceptionCategory.FORMAT_DIFF]
    assert store.has_compare_exceptions is False
    assert bool(store) is True


def test_empty_store() -> None:
    store = ExceptionStore()

    assert not store
    assert store.first(ExceptionCategory.COMPARE) is None
    assert store.count(ExceptionCategory.KEYING) == 0
    assert store.records() == ()
