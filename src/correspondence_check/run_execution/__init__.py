"""Run execution domain exports."""

from .run_contracts import RunOutcome, RunRequest, SuiteEvaluation
from .suite_run_use_case import (
    RunExecutionError,
    describe_relation,
    evaluate_case,
    evaluate_suite,
    execute_suite_run,
)

__all__ = [
    "RunRequest",
    "RunOutcome",
    "SuiteEvaluation",
    "RunExecutionError",
    "describe_relation",
    "evaluate_case",
    "evaluate_suite",
    "execute_suite_run",
]
