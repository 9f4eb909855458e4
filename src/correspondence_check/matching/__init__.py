"""Matching domain exports."""

from .bipartite_matching import maximum_bipartite_matching
from .correspondence_matcher import evaluate_candidates, match_correspondence
from .exception_records import ExceptionCategory, ExceptionRecord, ExceptionStore
from .matching_outcomes import CandidateEdges, FailureStage, MatchOutcome, Pairing, QueryMode

__all__ = [
    "QueryMode",
    "FailureStage",
    "CandidateEdges",
    "Pairing",
    "MatchOutcome",
    "ExceptionCategory",
    "ExceptionRecord",
    "ExceptionStore",
    "evaluate_candidates",
    "match_correspondence",
    "maximum_bipartite_matching",
]
