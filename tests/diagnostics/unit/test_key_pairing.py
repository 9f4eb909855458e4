"""Key pairing tests."""

from __future__ import annotations

from correspondence_check.diagnostics import KeyedGroup, KeyPairing, pair_by_keys
from correspondence_check.matching import ExceptionCategory, ExceptionStore


def _by_id() -> KeyPairing:
    return KeyPairing(
        actual_key_function=lambda record: record["id"],
        expected_key_function=lambda record: record["id"],
    )


def test_groups_actual_values_under_expected_key() -> None:
    expected = [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}]
    actual = [{"id": 2, "v": "x"}, {"id": 3, "v": "y"}, {"id": 2, "v": "z"}]

    pairs = pair_by_keys(_by_id(), expected, actual, ExceptionStore())

    assert pairs is not None
    assert pairs.groups == (
        KeyedGroup(key=2, expected=expected[1], actual=(actual[0], actual[2])),
    )
    assert pairs.unpaired_expected == (expected[0],)
    assert pairs.unpaired_actual == (actual[1],)


def test_non_unique_expected_keys_disable_pairing() -> None:
    expected = [{"id": 1}, {"id": 1}]

    assert pair_by_keys(_by_id(), expected, [{"id": 1}], ExceptionStore()) is None


def test_raising_key_functions_leave_elements_unpaired_and_are_recorded() -> None:
    store = ExceptionStore()

    pairs = pair_by_keys(_by_id(), [{"id": 1}], [{"name": "no id"}], store)

    assert pairs is not None
    assert pairs.groups == ()
    assert pairs.unpaired_actual == ({"name": "no id"},)
    record = store.first(ExceptionCategory.KEYING)
    assert record is not None
    assert record.method_name == "actual_key_function"
    assert isinstance(record.exception, KeyError)


def test_none_and_unhashable_keys_are_unpaired() -> None:
    store = ExceptionStore()
    pairing = KeyPairing(actual_key_function=lambda value: value, expected_key_function=list)

    pairs = pair_by_keys(pairing, ["ab"], [None], store)

    assert pairs is not None
    assert pairs.groups == ()
    assert pairs.unpaired_expected == ("ab",)
    assert pairs.unpaired_actual == (None,)
    assert store.count(ExceptionCategory.KEYING) == 1
