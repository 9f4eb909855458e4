"""Diagnostic construction for failed iterable correspondence checks."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from correspondence_check.matching import (
    ExceptionCategory,
    ExceptionStore,
    FailureStage,
    MatchOutcome,
    QueryMode,
)
from correspondence_check.multisets import Multiset
from correspondence_check.relations import Relation

from .diagnostic_models import SEPARATOR, Diagnostic, Fact, fact, simple_fact
from .exception_facts import additional_info_facts, main_cause_facts
from .key_pairing import KeyPairing, KeyedPairs, pair_by_keys
from .value_rendering import render_counted, render_list, render_value

NON_UNIQUE_KEYS = (
    "a key function which does not uniquely key the expected elements was provided and has"
    " consequently been ignored"
)
_NO_ONE_TO_ONE_EXACT = (
    "in an assertion requiring a 1:1 mapping between the expected and the actual elements, each"
    " actual element matches as least one expected element, and vice versa, but there was no 1:1"
    " mapping"
)
_NO_ONE_TO_ONE_SUBSET = (
    "in an assertion requiring a 1:1 mapping between the expected and a subset of the actual"
    " elements, each actual element matches as least one expected element, and vice versa, but"
    " there was no 1:1 mapping"
)
_MOST_COMPLETE_MAPPING = (
    "using the most complete 1:1 mapping (or one such mapping, if there is a tie)"
)


@dataclass(frozen=True)
class IterableCheckContext:
    """Inputs of one iterable check, as needed to explain its failure.

    `single_expected` marks the one-element checks (`contains`, `does_not_contain`), whose
    expected side is rendered as a bare value.
    """

    actual: Multiset
    expected: Multiset
    relation: Relation
    exceptions: ExceptionStore
    key_pairing: KeyPairing | None = None
    single_expected: bool = False


def relation_facts(relation: Relation, subject: str = "element") -> list[Fact]:
    """Describe the relation in use; natural equality needs no description."""
    if relation.is_equality:
        return []
    return [fact("testing whether", f"actual {subject} {relation} expected {subject}")]


def describe_iterable_failure(context: IterableCheckContext, outcome: MatchOutcome) -> Diagnostic:
    """Explain a failed matching query, followed by any captured exceptions."""
    if outcome.mode is QueryMode.ANY:
        facts = _any_failure_facts(context)
    elif outcome.mode is QueryMode.NONE:
        facts = _none_failure_facts(context, outcome)
    elif outcome.failure_stage is FailureStage.EXPECTED_EMPTY:
        facts = [
            simple_fact("expected to be empty"),
            fact("but was", render_list(context.actual.values)),
        ]
    else:
        facts = _pairing_failure_facts(context, outcome)
    facts.extend(additional_info_facts(context.exceptions))
    return Diagnostic.of(facts)


def describe_exception_failure(context: IterableCheckContext, outcome: MatchOutcome) -> Diagnostic:
    """Explain a query that succeeded only by treating raising comparisons as non-matching."""
    facts = main_cause_facts(context.exceptions)
    facts.append(_expected_fact(context, outcome.mode))
    facts.extend(relation_facts(context.relation))
    if outcome.mode is QueryMode.ANY:
        found = context.actual[outcome.pairing.actual_indices[0]]
        facts.append(fact("found match (but failing because of exception)", render_value(found)))
    elif outcome.mode is QueryMode.NONE:
        plural = "match" if context.single_expected else "matches"
        facts.append(simple_fact(f"found no {plural} (but failing because of exception)"))
    else:
        found_values = [context.actual[index] for index in outcome.pairing.actual_indices]
        facts.append(
            fact(
                "found all expected elements (but failing because of exception)",
                render_list(found_values),
            )
        )
    facts.append(fact("full contents", render_list(context.actual.values)))
    return Diagnostic.of(facts)


def describe_order_failure(context: IterableCheckContext, outcome: MatchOutcome) -> Diagnostic:
    """Explain a successful EXACT or ALL_INTO_SUBSET query whose matches are out of order."""
    expected_values = render_list(context.expected.values)
    if outcome.mode is QueryMode.EXACT:
        facts = [
            simple_fact("contents match, but order was wrong"),
            fact("expected", expected_values),
            *relation_facts(context.relation),
        ]
    else:
        matched = context.actual.values_at(outcome.pairing.actual_indices)
        facts = [
            simple_fact("required elements were all found, but order was wrong"),
            fact("expected order for required elements", expected_values),
            *relation_facts(context.relation),
            fact("matched elements in actual order", render_list(matched)),
        ]
    facts.append(fact("but was", render_list(context.actual.values)))
    return Diagnostic.of(facts)


def _pairing_failure_facts(context: IterableCheckContext, outcome: MatchOutcome) -> list[Fact]:
    exact = outcome.mode is QueryMode.EXACT
    facts: list[Fact] = []
    if outcome.failure_stage is FailureStage.MATCHING:
        facts.append(simple_fact(_NO_ONE_TO_ONE_EXACT if exact else _NO_ONE_TO_ONE_SUBSET))
        facts.append(simple_fact(_MOST_COMPLETE_MAPPING))

    missing = context.expected.values_at(outcome.missing_expected)
    extra = context.actual.values_at(outcome.extra_actual)
    pairs = _pair_if_requested(context, missing, extra)
    if pairs is not None:
        facts.extend(_keyed_facts(context, pairs, exact=exact))
    else:
        facts.extend(_unpaired_facts(context, missing, extra if exact else (), with_diffs=True))
        facts.append(simple_fact(SEPARATOR))
        if context.key_pairing is not None:
            facts.append(simple_fact(NON_UNIQUE_KEYS))

    facts.append(_expected_fact(context, outcome.mode))
    facts.extend(relation_facts(context.relation))
    facts.append(fact("but was", render_list(context.actual.values)))
    return facts


def _keyed_facts(context: IterableCheckContext, pairs: KeyedPairs, *, exact: bool) -> list[Fact]:
    extra_label = "unexpected" if exact else "did contain elements with that key"
    facts: list[Fact] = []
    for group in pairs.groups:
        facts.append(fact("for key", render_value(group.key)))
        facts.append(fact("missing", render_value(group.expected)))
        facts.extend(_extra_facts(context, extra_label, group.actual, group.expected))
        facts.append(simple_fact(SEPARATOR))

    unpaired_extra = pairs.unpaired_actual if exact else ()
    if pairs.unpaired_expected or unpaired_extra:
        facts.append(simple_fact("elements without matching keys:"))
        facts.extend(
            _unpaired_facts(context, pairs.unpaired_expected, unpaired_extra, with_diffs=False)
        )
        facts.append(simple_fact(SEPARATOR))
    return facts


def _unpaired_facts(
    context: IterableCheckContext,
    missing: Sequence[Any],
    extra: Sequence[Any],
    *,
    with_diffs: bool,
) -> list[Fact]:
    facts: list[Fact] = []
    if missing:
        facts.append(
            fact(
                f"missing ({len(missing)})",
                render_counted(missing, context.expected.equivalence_key),
            )
        )
    if not extra:
        return facts
    if with_diffs and len(missing) == 1:
        facts.extend(_extra_facts(context, "unexpected", extra, missing[0], counted=True))
    else:
        facts.append(
            fact(
                f"unexpected ({len(extra)})",
                render_counted(extra, context.actual.equivalence_key),
            )
        )
    return facts


def _extra_facts(
    context: IterableCheckContext,
    label: str,
    extra: Sequence[Any],
    expected_value: Any,
    *,
    counted: bool = False,
) -> list[Fact]:
    """List `extra` under `label`, each with its diff against `expected_value` when available."""
    diffs = [
        safe_diff(context.relation, actual_value, expected_value, context.exceptions)
        for actual_value in extra
    ]
    heading = f"{label} ({len(extra)})"
    if all(diff is None for diff in diffs):
        rendered = (
            render_counted(extra, context.actual.equivalence_key) if counted else render_list(extra)
        )
        return [fact(heading, rendered)]

    facts = [simple_fact(heading)]
    for position, (actual_value, diff) in enumerate(zip(extra, diffs, strict=True), start=1):
        facts.append(fact(f"#{position}", render_value(actual_value)))
        if diff is not None:
            facts.append(fact("diff", diff))
    return facts


def _any_failure_facts(context: IterableCheckContext) -> list[Fact]:
    facts = [_expected_fact(context, QueryMode.ANY), *relation_facts(context.relation)]
    full_contents = render_list(context.actual.values)
    if context.key_pairing is None:
        facts.append(fact("but was", full_contents))
        return facts

    pairs = pair_by_keys(
        context.key_pairing, context.expected.values, context.actual.values, context.exceptions
    )
    if context.single_expected:
        if pairs is None or not pairs.groups:
            facts.append(fact("but was", full_contents))
            return facts
        group = pairs.groups[0]
        facts.append(simple_fact("but did not"))
        facts.extend(
            _extra_facts(
                context,
                "though it did contain elements with correct key",
                group.actual,
                group.expected,
            )
        )
        facts.append(simple_fact(SEPARATOR))
        facts.append(fact("full contents", full_contents))
        return facts

    facts.append(fact("but was", full_contents))
    if pairs is None:
        facts.append(simple_fact(NON_UNIQUE_KEYS))
    elif not pairs.groups:
        facts.append(simple_fact("it does not contain any matches by key, either"))
    else:
        for group in pairs.groups:
            facts.append(fact("for key", render_value(group.key)))
            facts.append(fact("expected any of", render_value(group.expected)))
            facts.extend(_extra_facts(context, "but got", group.actual, group.expected))
            facts.append(simple_fact(SEPARATOR))
    return facts


def _none_failure_facts(context: IterableCheckContext, outcome: MatchOutcome) -> list[Fact]:
    facts = [_expected_fact(context, QueryMode.NONE), *relation_facts(context.relation)]
    if context.single_expected:
        corresponding = context.actual.values_at(outcome.candidates.by_expected[0])
        facts.append(fact("but contained", render_list(corresponding)))
    else:
        reported: list[Any] = []
        for expected_index, actual_indices in enumerate(outcome.candidates.by_expected):
            expected_value = context.expected[expected_index]
            if not actual_indices or any(value == expected_value for value in reported):
                continue
            reported.append(expected_value)
            corresponding = context.actual.values_at(actual_indices)
            facts.append(fact("but contained", render_list(corresponding)))
            facts.append(fact("corresponding to", render_value(expected_value)))
            facts.append(simple_fact(SEPARATOR))
    facts.append(fact("full contents", render_list(context.actual.values)))
    return facts


def _expected_fact(context: IterableCheckContext, mode: QueryMode) -> Fact:
    if context.single_expected:
        label = "expected to contain" if mode is QueryMode.ANY else "expected not to contain"
        return fact(label, render_value(context.expected[0]))
    labels = {
        QueryMode.ANY: "expected to contain any of",
        QueryMode.ALL_INTO_SUBSET: "expected to contain at least",
        QueryMode.EXACT: "expected",
        QueryMode.NONE: "expected not to contain any of",
    }
    return fact(labels[mode], render_list(context.expected.values))


def _pair_if_requested(
    context: IterableCheckContext, missing: Sequence[Any], extra: Sequence[Any]
) -> KeyedPairs | None:
    if context.key_pairing is None:
        return None
    return pair_by_keys(context.key_pairing, missing, extra, context.exceptions)


def safe_diff(
    relation: Relation,
    actual_value: Any,
    expected_value: Any,
    exceptions: ExceptionStore,
) -> str | None:
    """Format a diff, recording instead of raising any exception from the formatter."""
    outcome = relation.diff(actual_value, expected_value)
    if outcome.error is not None:
        exceptions.record(
            ExceptionCategory.FORMAT_DIFF,
            "format_diff",
            (actual_value, expected_value),
            outcome.error,
        )
    return outcome.text
