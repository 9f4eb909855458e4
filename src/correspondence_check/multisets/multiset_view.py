"""Duplicate-aware, order-preserving views over checked sequences."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

EquivalenceKey = Callable[[Any], Any]


@dataclass(frozen=True)
class MultisetEntry:
    """One element together with its position in the original sequence."""

    value: Any
    original_index: int


@dataclass(frozen=True)
class ElementGroup:
    """Run of equivalent elements, represented by the first one seen."""

    representative: Any
    count: int


class Multiset:
    """Immutable sequence view that can count equivalent elements.

    Matching always works on individual entries. Grouping exists only to render duplicates
    compactly, and uses `equivalence_key` (natural equality by default), never the relation.
    """

    def __init__(
        self,
        values: Iterable[Any],
        equivalence_key: EquivalenceKey | None = None,
    ) -> None:
        self._entries = tuple(
            MultisetEntry(value=value, original_index=index) for index, value in enumerate(values)
        )
        self._equivalence_key = equivalence_key or _natural_key

    @property
    def equivalence_key(self) -> EquivalenceKey:
        return self._equivalence_key

    @property
    def entries(self) -> tuple[MultisetEntry, ...]:
        return self._entries

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(entry.value for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MultisetEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Any:
        return self._entries[index].value

    def values_at(self, indices: Iterable[int]) -> tuple[Any, ...]:
        """Return the values at `indices`, in ascending original order."""
        return tuple(self._entries[index].value for index in sorted(set(indices)))

    def grouped(self, indices: Iterable[int] | None = None) -> tuple[ElementGroup, ...]:
        """Group the selected entries (all by default) by equivalence, in first-seen order."""
        values = self.values if indices is None else self.values_at(indices)
        return group_equivalent_values(values, self._equivalence_key)


def group_equivalent_values(
    values: Sequence[Any],
    equivalence_key: EquivalenceKey | None = None,
) -> tuple[ElementGroup, ...]:
    """Count equivalent values, keeping the order in which each group first appears.

    Without `equivalence_key` values group by natural equality, so `1`, `1.0` and `True` fall into
    one group represented by whichever came first.
    """
    key_function = equivalence_key or _natural_key
    representatives: list[Any] = []
    counts: list[int] = []
    hashed_positions: dict[Any, int] = {}
    unhashable_keys: list[tuple[Any, int]] = []

    for value in values:
        key = key_function(value)
        position = _find_group(key, hashed_positions, unhashable_keys)
        if position is None:
            position = len(representatives)
            representatives.append(value)
            counts.append(0)
            _remember_group(key, position, hashed_positions, unhashable_keys)
        counts[position] += 1

    return tuple(
        ElementGroup(representative=representative, count=count)
        for representative, count in zip(representatives, counts, strict=True)
    )


def _find_group(
    key: Any,
    hashed_positions: dict[Any, int],
    unhashable_keys: list[tuple[Any, int]],
) -> int | None:
    try:
        return hashed_positions.get(key)
    except TypeError:
        for known_key, position in unhashable_keys:
            if known_key == key:
                return position
        return None


def _remember_group(
    key: Any,
    position: int,
    hashed_positions: dict[Any, int],
    unhashable_keys: list[tuple[Any, int]],
) -> None:
    try:
        hashed_positions[key] = position
    except TypeError:
        unhashable_keys.append((key, position))


def _natural_key(value: Any) -> Any:
    return value
