"""Pairing of unmatched elements by key, used to show wrong-value diffs."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from correspondence_check.matching import ExceptionCategory, ExceptionStore

KeyFunction = Callable[[Any], Any]

_UNKEYED = object()


@dataclass(frozen=True)
class KeyPairing:
    """Key functions for actual and expected elements; only affects failure diagnostics."""

    actual_key_function: KeyFunction
    expected_key_function: KeyFunction


@dataclass(frozen=True)
class KeyedGroup:
    """One expected element and the unmatched actual elements sharing its key."""

    key: Any
    expected: Any
    actual: tuple[Any, ...]


@dataclass(frozen=True)
class KeyedPairs:
    """Outcome of pairing unmatched elements by key."""

    groups: tuple[KeyedGroup, ...]
    unpaired_expected: tuple[Any, ...]
    unpaired_actual: tuple[Any, ...]


def pair_by_keys(
    key_pairing: KeyPairing,
    expected_values: Sequence[Any],
    actual_values: Sequence[Any],
    exceptions: ExceptionStore,
) -> KeyedPairs | None:
    """Group actual values under the expected value with the same key.

    Returns None when two expected values share a key, in which case the pairing must be
    ignored. A key function that raises or returns None leaves that element unpaired.
    """
    expected_keys = [
        _safe_key(key_pairing.expected_key_function, "expected_key_function", value, exceptions)
        for value in expected_values
    ]
    keyed_expected: dict[Any, Any] = {}
    for key, value in zip(expected_keys, expected_values, strict=True):
        if key is _UNKEYED:
            continue
        if key in keyed_expected:
            return None
        keyed_expected[key] = value

    actual_by_key: dict[Any, list[Any]] = {key: [] for key in keyed_expected}
    unpaired_actual: list[Any] = []
    for value in actual_values:
        key = _safe_key(key_pairing.actual_key_function, "actual_key_function", value, exceptions)
        if key is not _UNKEYED and key in actual_by_key:
            actual_by_key[key].append(value)
        else:
            unpaired_actual.append(value)

    groups: list[KeyedGroup] = []
    unpaired_expected: list[Any] = []
    for key, value in zip(expected_keys, expected_values, strict=True):
        if key is not _UNKEYED and actual_by_key[key]:
            groups.append(KeyedGroup(key=key, expected=value, actual=tuple(actual_by_key[key])))
        else:
            unpaired_expected.append(value)
    return KeyedPairs(
        groups=tuple(groups),
        unpaired_expected=tuple(unpaired_expected),
        unpaired_actual=tuple(unpaired_actual),
    )


def _safe_key(
    key_function: KeyFunction,
    method_name: str,
    value: Any,
    exceptions: ExceptionStore,
) -> Any:
    try:
        key = key_function(value)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        exceptions.record(ExceptionCategory.KEYING, method_name, (value,), exc)
        return _UNKEYED
    if key is None:
        return _UNKEYED
    try:
        hash(key)
    except TypeError as exc:
        exceptions.record(ExceptionCategory.KEYING, method_name, (value,), exc)
        return _UNKEYED
    return key
