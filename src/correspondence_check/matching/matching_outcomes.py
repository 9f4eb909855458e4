"""Matching domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .exception_records import ExceptionStore


class QueryMode(str, Enum):
    """Kind of correspondence a check requires."""

    ANY = "any"
    ALL_INTO_SUBSET = "all_into_subset"
    EXACT = "exact"
    NONE = "none"


class FailureStage(str, Enum):
    """Point at which a matching query was found to fail."""

    EXPECTED_EMPTY = "expected_empty"
    CANDIDATES = "candidates"
    MATCHING = "matching"
    NO_CORRESPONDENCE = "no_correspondence"
    CORRESPONDENCE_FOUND = "correspondence_found"


@dataclass(frozen=True)
class CandidateEdges:
    """Pairs for which the relation held, indexed from both sides."""

    by_expected: tuple[tuple[int, ...], ...]
    by_actual: tuple[tuple[int, ...], ...]

    @property
    def edge_count(self) -> int:
        return sum(len(actual_indices) for actual_indices in self.by_expected)

    @property
    def is_empty(self) -> bool:
        return self.edge_count == 0


@dataclass(frozen=True)
class Pairing:
    """Injective map from expected indices to actual indices, sorted by expected index."""

    pairs: tuple[tuple[int, int], ...] = ()

    @classmethod
    def from_mapping(cls, expected_to_actual: Mapping[int, int]) -> Pairing:
        return cls(pairs=tuple(sorted(expected_to_actual.items())))

    def as_dict(self) -> dict[int, int]:
        return dict(self.pairs)

    @property
    def expected_indices(self) -> tuple[int, ...]:
        return tuple(expected_index for expected_index, _ in self.pairs)

    @property
    def actual_indices(self) -> tuple[int, ...]:
        """Matched actual indices taken in expected-index order."""
        return tuple(actual_index for _, actual_index in self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)


@dataclass(frozen=True)
class MatchOutcome:
    """Result of one matching query over an actual and an expected multiset.

    `missing_expected` and `extra_actual` hold the indices left over at the stage that decided
    the outcome: elements without any candidate edge at the candidate stage, or elements left
    unpaired by the maximum matching at the matching stage.
    """

    mode: QueryMode
    succeeded: bool
    pairing: Pairing
    candidates: CandidateEdges
    missing_expected: tuple[int, ...]
    extra_actual: tuple[int, ...]
    exceptions: ExceptionStore
    failure_stage: FailureStage | None = None
