"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from correspondence_check.configuration.runtime_settings import CheckSuite
from correspondence_check.results_writing.report_models import CaseReport, CaseStatus


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one run."""

    suite_path: str
    output_dir: str | None = None
    case_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class SuiteEvaluation:
    """Reports for the evaluated cases of one suite, in suite order."""

    suite: CheckSuite
    reports: tuple[CaseReport, ...]

    def count(self, status: CaseStatus) -> int:
        return sum(1 for report in self.reports if report.status == status)

    @property
    def all_passed(self) -> bool:
        return all(report.status == CaseStatus.PASSED for report in self.reports)


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    output_path: Path
    passed: int
    failed: int
    invalid: int
