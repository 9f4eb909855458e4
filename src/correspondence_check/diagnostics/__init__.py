"""Diagnostic domain exports."""

from .diagnostic_builder import (
    NON_UNIQUE_KEYS,
    IterableCheckContext,
    describe_exception_failure,
    describe_iterable_failure,
    describe_order_failure,
    relation_facts,
    safe_diff,
)
from .diagnostic_models import SEPARATOR, Diagnostic, Fact, fact, simple_fact
from .entry_diagnostics import (
    EntryCheckContext,
    EntryComparison,
    WrongValue,
    describe_entries_failure,
    describe_entries_order_failure,
    describe_entry_failure,
    describe_excluded_entry_exception,
    describe_excluded_entry_failure,
)
from .exception_facts import additional_info_facts, describe_exception, main_cause_facts
from .key_pairing import KeyedGroup, KeyedPairs, KeyPairing, pair_by_keys
from .value_rendering import (
    render_counted,
    render_entries,
    render_entry,
    render_list,
    render_map,
    render_value,
)

__all__ = [
    "Fact",
    "Diagnostic",
    "SEPARATOR",
    "fact",
    "simple_fact",
    "render_value",
    "render_list",
    "render_map",
    "render_entry",
    "render_entries",
    "render_counted",
    "describe_exception",
    "main_cause_facts",
    "additional_info_facts",
    "KeyPairing",
    "KeyedGroup",
    "KeyedPairs",
    "pair_by_keys",
    "NON_UNIQUE_KEYS",
    "IterableCheckContext",
    "relation_facts",
    "safe_diff",
    "describe_iterable_failure",
    "describe_exception_failure",
    "describe_order_failure",
    "EntryCheckContext",
    "EntryComparison",
    "WrongValue",
    "describe_entries_failure",
    "describe_entries_order_failure",
    "describe_entry_failure",
    "describe_excluded_entry_failure",
    "describe_excluded_entry_exception",
]
