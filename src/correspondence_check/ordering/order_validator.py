"""Order validation for successful pairings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from correspondence_check.matching import CandidateEdges, MatchOutcome, Pairing, QueryMode

_LOGGER = logging.getLogger(__name__)


class OrderValidationError(ValueError):
    """Raised when order is checked for an outcome that cannot carry an order."""


@dataclass(frozen=True)
class OrderCheck:
    """Result of checking the order of a successful pairing."""

    in_order: bool
    pairing: Pairing


def is_order_preserving(pairing: Pairing) -> bool:
    """Return True when actual indices strictly increase in expected-index order."""
    actual_indices = pairing.actual_indices
    return all(
        earlier < later
        for earlier, later in zip(actual_indices, actual_indices[1:], strict=False)
    )


def find_order_preserving_pairing(candidates: CandidateEdges) -> Pairing | None:
    """Find a pairing of every expected index whose actual indices strictly increase.

    Each expected element takes its earliest candidate after the previous choice. That choice
    never rules out a later expected element, so failing here means no such pairing exists.
    """
    chosen: dict[int, int] = {}
    last_actual = -1
    for expected_index, actual_indices in enumerate(candidates.by_expected):
        following = [index for index in actual_indices if index > last_actual]
        if not following:
            return None
        last_actual = min(following)
        chosen[expected_index] = last_actual
    return Pairing.from_mapping(chosen)


def validate_order(outcome: MatchOutcome) -> OrderCheck:
    """Check whether a successful EXACT or ALL_INTO_SUBSET outcome also holds in order."""
    if not outcome.succeeded or outcome.mode not in (QueryMode.EXACT, QueryMode.ALL_INTO_SUBSET):
        raise OrderValidationError(
            f"Order can only be checked for a successful exact or subset match, got "
            f"{outcome.mode.value} (succeeded={outcome.succeeded})."
        )
    if is_order_preserving(outcome.pairing):
        return OrderCheck(in_order=True, pairing=outcome.pairing)

    alternative = find_order_preserving_pairing(outcome.candidates)
    if alternative is None:
        _LOGGER.debug(
            "No order-preserving pairing exists over %d candidate edges",
            outcome.candidates.edge_count,
        )
        return OrderCheck(in_order=False, pairing=outcome.pairing)
    if outcome.mode is QueryMode.EXACT and len(alternative) != len(outcome.candidates.by_actual):
        return OrderCheck(in_order=False, pairing=outcome.pairing)
    return OrderCheck(in_order=True, pairing=alternative)
