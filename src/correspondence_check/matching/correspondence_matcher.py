"""Correspondence queries between an actual and an expected multiset."""

from __future__ import annotations

import logging

from correspondence_check.multisets import Multiset
from correspondence_check.relations import Relation

from .bipartite_matching import maximum_bipartite_matching
from .exception_records import ExceptionCategory, ExceptionStore
from .matching_outcomes import CandidateEdges, FailureStage, MatchOutcome, Pairing, QueryMode

_LOGGER = logging.getLogger(__name__)


def evaluate_candidates(
    actual: Multiset,
    expected: Multiset,
    relation: Relation,
    exceptions: ExceptionStore,
    *,
    stop_at_first: bool = False,
) -> CandidateEdges:
    """Test pairs in actual-then-expected order and collect those the relation accepts.

    A pair whose evaluation raises has no edge; the exception is recorded in `exceptions`.
    With `stop_at_first` the scan ends at the first accepted pair.
    """
    by_expected: list[list[int]] = [[] for _ in range(len(expected))]
    by_actual: list[list[int]] = [[] for _ in range(len(actual))]

    for actual_entry in actual:
        for expected_entry in expected:
            outcome = relation.test(actual_entry.value, expected_entry.value)
            if outcome.error is not None:
                exceptions.record(
                    ExceptionCategory.COMPARE,
                    "compare",
                    (actual_entry.value, expected_entry.value),
                    outcome.error,
                )
                continue
            if not outcome.matched:
                continue
            by_expected[expected_entry.original_index].append(actual_entry.original_index)
            by_actual[actual_entry.original_index].append(expected_entry.original_index)
            if stop_at_first:
                return _freeze(by_expected, by_actual)
    return _freeze(by_expected, by_actual)


def match_correspondence(
    actual: Multiset,
    expected: Multiset,
    relation: Relation,
    mode: QueryMode,
    exceptions: ExceptionStore | None = None,
) -> MatchOutcome:
    """Answer one correspondence query.

    Relation exceptions never abort the query; they are recorded and the pair is treated as not
    corresponding. Whether recorded exceptions fail an otherwise successful check is decided by
    the caller.
    """
    store = exceptions if exceptions is not None else ExceptionStore()
    _LOGGER.debug(
        "Matching %d actual against %d expected elements in %s mode",
        len(actual),
        len(expected),
        mode.value,
    )
    if mode is QueryMode.ANY:
        return _match_any(actual, expected, relation, store)
    if mode is QueryMode.NONE:
        return _match_none(actual, expected, relation, store)
    if mode is QueryMode.EXACT and not len(expected) and len(actual):
        return MatchOutcome(
            mode=mode,
            succeeded=False,
            pairing=Pairing(),
            candidates=_freeze([], [[] for _ in range(len(actual))]),
            missing_expected=(),
            extra_actual=tuple(range(len(actual))),
            exceptions=store,
            failure_stage=FailureStage.EXPECTED_EMPTY,
        )
    return _match_pairing(actual, expected, relation, mode, store)


def _match_any(
    actual: Multiset, expected: Multiset, relation: Relation, store: ExceptionStore
) -> MatchOutcome:
    candidates = evaluate_candidates(actual, expected, relation, store, stop_at_first=True)
    pairing = Pairing.from_mapping(
        {
            expected_index: actual_indices[0]
            for expected_index, actual_indices in enumerate(candidates.by_expected)
            if actual_indices
        }
    )
    succeeded = bool(pairing)
    return MatchOutcome(
        mode=QueryMode.ANY,
        succeeded=succeeded,
        pairing=pairing,
        candidates=candidates,
        missing_expected=() if succeeded else tuple(range(len(expected))),
        extra_actual=() if succeeded else tuple(range(len(actual))),
        exceptions=store,
        failure_stage=None if succeeded else FailureStage.NO_CORRESPONDENCE,
    )


def _match_none(
    actual: Multiset, expected: Multiset, relation: Relation, store: ExceptionStore
) -> MatchOutcome:
    candidates = evaluate_candidates(actual, expected, relation, store)
    succeeded = candidates.is_empty
    return MatchOutcome(
        mode=QueryMode.NONE,
        succeeded=succeeded,
        pairing=Pairing(),
        candidates=candidates,
        missing_expected=(),
        extra_actual=(),
        exceptions=store,
        failure_stage=None if succeeded else FailureStage.CORRESPONDENCE_FOUND,
    )


def _match_pairing(
    actual: Multiset,
    expected: Multiset,
    relation: Relation,
    mode: QueryMode,
    store: ExceptionStore,
) -> MatchOutcome:
    candidates = evaluate_candidates(actual, expected, relation, store)
    pairing = Pairing.from_mapping(
        maximum_bipartite_matching(candidates.by_expected, len(actual))
    )
    exact = mode is QueryMode.EXACT

    missing = _indices_without_edges(candidates.by_expected)
    extra = _indices_without_edges(candidates.by_actual)
    if missing or (exact and extra):
        return MatchOutcome(
            mode=mode,
            succeeded=False,
            pairing=pairing,
            candidates=candidates,
            missing_expected=missing,
            extra_actual=extra,
            exceptions=store,
            failure_stage=FailureStage.CANDIDATES,
        )

    missing = _unpaired(len(expected), pairing.expected_indices)
    extra = _unpaired(len(actual), pairing.actual_indices)
    succeeded = not missing and (not exact or not extra)
    _LOGGER.debug("Maximum matching paired %d of %d expected elements", len(pairing), len(expected))
    return MatchOutcome(
        mode=mode,
        succeeded=succeeded,
        pairing=pairing,
        candidates=candidates,
        missing_expected=missing,
        extra_actual=extra,
        exceptions=store,
        failure_stage=None if succeeded else FailureStage.MATCHING,
    )


def _indices_without_edges(edges: tuple[tuple[int, ...], ...]) -> tuple[int, ...]:
    return tuple(index for index, neighbours in enumerate(edges) if not neighbours)


def _unpaired(size: int, paired: tuple[int, ...]) -> tuple[int, ...]:
    paired_set = set(paired)
    return tuple(index for index in range(size) if index not in paired_set)


def _freeze(by_expected: list[list[int]], by_actual: list[list[int]]) -> CandidateEdges:
    return CandidateEdges(
        by_expected=tuple(tuple(indices) for indices in by_expected),
        by_actual=tuple(tuple(indices) for indices in by_actual),
    )
