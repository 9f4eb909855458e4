"""Multiset domain exports."""

from .multiset_view import (
    ElementGroup,
    EquivalenceKey,
    Multiset,
    MultisetEntry,
    group_equivalent_values,
)

__all__ = [
    "Multiset",
    "MultisetEntry",
    "ElementGroup",
    "EquivalenceKey",
    "group_equivalent_values",
]
