"""Check domain exports."""

from .check_contracts import CheckInputError, CheckResult, CorrespondenceAssertionError
from .iterable_checks import (
    contains,
    contains_any_in,
    contains_at_least_elements_in,
    contains_exactly_elements_in,
    contains_none_in,
    does_not_contain,
    pairing_by,
)
from .map_checks import (
    contains_at_least_entries_in,
    contains_entry,
    contains_exactly_entries_in,
    does_not_contain_entry,
)

__all__ = [
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
