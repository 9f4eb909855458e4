"""Correspondence-based collection checks with readable failure diagnostics."""

import logging

from .checks import (
    CheckInputError,
    CheckResult,
    CorrespondenceAssertionError,
    contains,
    contains_any_in,
    contains_at_least_elements_in,
    contains_at_least_entries_in,
    contains_entry,
    contains_exactly_elements_in,
    contains_exactly_entries_in,
    contains_none_in,
    does_not_contain,
    does_not_contain_entry,
    pairing_by,
)
from .relations import Relation, equality, from_predicate, tolerance, transforming

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Relation",
    "equality",
    "from_predicate",
    "tolerance",
    "transforming",
    "CheckResult",
    "CheckInputError",
    "CorrespondenceAssertionError",
    "pairing_by",
    "contains",
    "does_not_contain",
    "contains_any_in",
    "contains_at_least_elements_in",
    "contains_exactly_elements_in",
    "contains_none_in",
    "contains_entry",
    "does_not_contain_entry",
    "contains_exactly_entries_in",
    "contains_at_least_entries_in",
]
