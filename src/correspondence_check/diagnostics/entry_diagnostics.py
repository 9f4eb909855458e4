"""Diagnostic construction for failed map entry checks."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from correspondence_check.matching import ExceptionStore
from correspondence_check.relations import Relation

from .diagnostic_builder import relation_facts, safe_diff
from .diagnostic_models import SEPARATOR, Diagnostic, Fact, fact, simple_fact
from .exception_facts import additional_info_facts, main_cause_facts
from .value_rendering import render_entries, render_entry, render_list, render_map, render_value

_VALUES = "values"


@dataclass(frozen=True)
class WrongValue:
    """Expected key present in the actual map with a non-corresponding value."""

    key: Any
    expected: Any
    actual: Any


@dataclass(frozen=True)
class EntryComparison:
    """Differences between an actual map and expected entries, in expected-entry order."""

    wrong_values: tuple[WrongValue, ...] = ()
    missing: tuple[tuple[Any, Any], ...] = ()
    unexpected: tuple[tuple[Any, Any], ...] = ()

    @property
    def has_differences(self) -> bool:
        return bool(self.wrong_values or self.missing or self.unexpected)


@dataclass(frozen=True)
class EntryCheckContext:
    """Inputs of one map check, as needed to explain its failure."""

    actual: Mapping[Any, Any]
    expected: Sequence[tuple[Any, Any]]
    relation: Relation
    exceptions: ExceptionStore


def describe_entries_failure(
    context: EntryCheckContext, comparison: EntryComparison, *, exact: bool
) -> Diagnostic:
    """Explain wrong, missing and (for exact checks) unexpected entries."""
    facts: list[Fact] = []
    if comparison.wrong_values:
        facts.append(simple_fact("keys with wrong values"))
        for wrong in comparison.wrong_values:
            facts.append(fact("for key", render_value(wrong.key)))
            facts.append(fact("expected value", render_value(wrong.expected)))
            facts.append(fact("but got value", render_value(wrong.actual)))
            facts.extend(_diff_facts(context, wrong.actual, wrong.expected))
    if comparison.missing:
        facts.append(simple_fact("missing keys"))
        for key, value in comparison.missing:
            facts.append(fact("for key", render_value(key)))
            facts.append(fact("expected value", render_value(value)))
    if exact and comparison.unexpected:
        facts.append(simple_fact("unexpected keys"))
        for key, value in comparison.unexpected:
            facts.append(fact("for key", render_value(key)))
            facts.append(fact("unexpected value", render_value(value)))
    facts.append(simple_fact(SEPARATOR))
    facts.append(_expected_entries_fact(context, exact=exact))
    facts.extend(relation_facts(context.relation, "value"))
    facts.append(fact("but was", render_map(context.actual)))
    facts.extend(additional_info_facts(context.exceptions, _VALUES))
    return Diagnostic.of(facts)


def describe_entries_order_failure(context: EntryCheckContext, *, exact: bool) -> Diagnostic:
    """Explain matching entries whose keys appear in the wrong order."""
    heading = (
        "entries match, but order was wrong"
        if exact
        else "required entries were all found, but order was wrong"
    )
    return Diagnostic.of(
        [
            simple_fact(heading),
            _expected_entries_fact(context, exact=exact),
            *relation_facts(context.relation, "value"),
            fact("but was", render_map(context.actual)),
        ]
    )


def describe_entry_failure(
    context: EntryCheckContext,
    key: Any,
    value: Any,
    other_matching_keys: Sequence[Any],
) -> Diagnostic:
    """Explain an expected entry whose key is absent or holds a non-corresponding value."""
    facts = [
        fact("for key", render_value(key)),
        fact("expected value", render_value(value)),
        *relation_facts(context.relation, "value"),
    ]
    if key in context.actual:
        actual_value = context.actual[key]
        facts.append(fact("but got value", render_value(actual_value)))
        facts.extend(_diff_facts(context, actual_value, value))
    else:
        facts.append(simple_fact("but was missing"))
        if other_matching_keys:
            facts.append(fact("other keys with matching values", render_list(other_matching_keys)))
    facts.append(fact("full map", render_map(context.actual)))
    facts.extend(additional_info_facts(context.exceptions, _VALUES))
    return Diagnostic.of(facts)


def describe_excluded_entry_failure(context: EntryCheckContext, key: Any, value: Any) -> Diagnostic:
    """Explain an excluded entry that the actual map contains."""
    return Diagnostic.of(
        [
            fact("expected not to contain", render_entry(key, value)),
            *relation_facts(context.relation, "value"),
            fact("but contained", render_entry(key, context.actual[key])),
            fact("full map", render_map(context.actual)),
        ]
    )


def describe_excluded_entry_exception(
    context: EntryCheckContext, key: Any, value: Any
) -> Diagnostic:
    """Explain an excluded-entry check that could only pass by ignoring a raising comparison."""
    return Diagnostic.of(
        [
            *main_cause_facts(context.exceptions, _VALUES),
            fact("expected not to contain", render_entry(key, value)),
            *relation_facts(context.relation, "value"),
            simple_fact("found no match (but failing because of exception)"),
            fact("full map", render_map(context.actual)),
        ]
    )


def _expected_entries_fact(context: EntryCheckContext, *, exact: bool) -> Fact:
    label = "expected" if exact else "expected to contain at least"
    return fact(label, render_entries(context.expected))


def _diff_facts(context: EntryCheckContext, actual_value: Any, expected_value: Any) -> list[Fact]:
    diff = safe_diff(context.relation, actual_value, expected_value, context.exceptions)
    return [] if diff is None else [fact("diff", diff)]
