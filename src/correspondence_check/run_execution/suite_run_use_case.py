"""Run execution use-case service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from operator import itemgetter
from pathlib import Path

from correspondence_check.checks import (
    CheckInputError,
    CheckResult,
    contains,
    contains_any_in,
    contains_at_least_elements_in,
    contains_at_least_entries_in,
    contains_entry,
    contains_exactly_elements_in,
    contains_exactly_entries_in,
    contains_none_in,
    does_not_contain,
    does_not_contain_entry,
    pairing_by,
)
from correspondence_check.configuration import (
    CheckCase,
    CheckKind,
    CheckSettings,
    CheckSuite,
    ConfigurationError,
    RelationConfig,
    load_check_suite,
)
from correspondence_check.relations import Relation, build_relation
from correspondence_check.results_writing import (
    CaseReport,
    CaseStatus,
    RunMetadata,
    write_results_workbook,
)

from .run_contracts import RunOutcome, RunRequest, SuiteEvaluation

_LOGGER = logging.getLogger(__name__)

_PAIRED_ELEMENT_CHECKS = {
    CheckKind.CONTAINS: contains,
    CheckKind.CONTAINS_ANY: contains_any_in,
    CheckKind.CONTAINS_AT_LEAST: contains_at_least_elements_in,
    CheckKind.CONTAINS_EXACTLY: contains_exactly_elements_in,
}
_EXCLUDING_ELEMENT_CHECKS = {
    CheckKind.DOES_NOT_CONTAIN: does_not_contain,
    CheckKind.CONTAINS_NONE: contains_none_in,
}
_ENTRIES_CHECKS = {
    CheckKind.CONTAINS_EXACTLY_ENTRIES: contains_exactly_entries_in,
    CheckKind.CONTAINS_AT_LEAST_ENTRIES: contains_at_least_entries_in,
}


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_suite_run(request: RunRequest) -> RunOutcome:
    """Evaluate a check suite and write its results workbook."""
    run_start = datetime.now(UTC)
    evaluation = evaluate_suite(request.suite_path, request.case_ids)
    output_path = _resolve_output_path(request.suite_path, request.output_dir)
    run_metadata = RunMetadata(
        run_start=run_start,
        suite_path=Path(request.suite_path).resolve(),
        output_path=output_path.resolve(),
        fail_on_relation_exceptions=evaluation.suite.settings.fail_on_relation_exceptions,
    )
    try:
        write_results_workbook(output_path, evaluation.reports, run_metadata)
    except OSError as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunOutcome(
        output_path=output_path.resolve(),
        passed=evaluation.count(CaseStatus.PASSED),
        failed=evaluation.count(CaseStatus.FAILED),
        invalid=evaluation.count(CaseStatus.INVALID),
    )


def evaluate_suite(suite_path: Path | str, case_ids: Sequence[str] = ()) -> SuiteEvaluation:
    """Load a check suite and evaluate the selected cases (all cases when none are named)."""
    suite = _load_suite(suite_path)
    cases = _select_cases(suite, case_ids)
    reports = tuple(evaluate_case(case, suite.settings) for case in cases)
    return SuiteEvaluation(suite=suite, reports=reports)


def evaluate_case(case: CheckCase, settings: CheckSettings) -> CaseReport:
    """Run one case's check and summarise its outcome."""
    try:
        result = _run_check(case, _build_relation(case.relation), settings)
    except CheckInputError as exc:
        _LOGGER.debug("Case %s rejected its inputs: %s", case.case_id, exc)
        return _report(case, CaseStatus.INVALID, str(exc))

    if case.in_order:
        result = result.in_order()
    if not result.passed:
        _LOGGER.debug("Case %s failed", case.case_id)
        details = result.diagnostic.render() if result.diagnostic is not None else ""
        return _report(case, CaseStatus.FAILED, details)
    details = result.notes.render() if result.notes is not None else ""
    return _report(case, CaseStatus.PASSED, details)


def describe_relation(relation: RelationConfig) -> str:
    if relation.tolerance is None:
        return relation.name
    return f"{relation.name} ({relation.tolerance:g})"


def _run_check(case: CheckCase, relation: Relation, settings: CheckSettings) -> CheckResult:
    strict = settings.fail_on_relation_exceptions
    if case.check in _PAIRED_ELEMENT_CHECKS:
        pairing = pairing_by(itemgetter(case.pair_by)) if case.pair_by else None
        return _PAIRED_ELEMENT_CHECKS[case.check](
            case.actual,
            case.expected,
            relation,
            pairing=pairing,
            fail_on_relation_exceptions=strict,
        )
    if case.check in _EXCLUDING_ELEMENT_CHECKS:
        return _EXCLUDING_ELEMENT_CHECKS[case.check](
            case.actual, case.expected, relation, fail_on_relation_exceptions=strict
        )
    if case.check in _ENTRIES_CHECKS:
        return _ENTRIES_CHECKS[case.check](case.actual, case.expected, relation)

    key, value = case.expected
    if case.check == CheckKind.CONTAINS_ENTRY:
        return contains_entry(case.actual, key, value, relation)
    return does_not_contain_entry(
        case.actual, key, value, relation, fail_on_relation_exceptions=strict
    )


def _build_relation(relation: RelationConfig) -> Relation:
    try:
        return build_relation(relation.name, tolerance_value=relation.tolerance)
    except ValueError as exc:
        raise RunExecutionError(str(exc)) from exc


def _report(case: CheckCase, status: CaseStatus, details: str) -> CaseReport:
    return CaseReport(
        case_id=case.case_id,
        check=case.check.value,
        relation=describe_relation(case.relation),
        in_order=case.in_order,
        status=status,
        details=details,
        description=case.description,
    )


def _load_suite(suite_path: Path | str) -> CheckSuite:
    try:
        return load_check_suite(suite_path)
    except (ConfigurationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc


def _select_cases(suite: CheckSuite, case_ids: Sequence[str]) -> tuple[CheckCase, ...]:
    if not case_ids:
        return suite.cases
    selected: list[CheckCase] = []
    for case_id in case_ids:
        try:
            selected.append(suite.case(case_id))
        except KeyError as exc:
            raise RunExecutionError(f"Unknown case id '{case_id}' in {suite.path}.") from exc
    return tuple(selected)


def _resolve_output_path(suite_path: str, output_dir: str | None) -> Path:
    suite_file = Path(suite_path)
    destination = Path(output_dir) if output_dir else suite_file.parent
    timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return destination / f"{suite_file.stem}-results-{timestamp}.xlsx"
