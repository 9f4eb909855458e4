"""Results workbook writer service."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .report_models import CaseReport, CaseStatus, RunMetadata

RESULTS_SHEET_NAME = "Results"
SUITE_SHEET_NAME = "Suite"
RUN_INFO_SHEET_NAME = "RunInfo"

CASE_COLUMNS: tuple[str, ...] = ("ID", "Check", "Relation", "In order", "Description")
OUTCOME_COLUMNS: tuple[str, ...] = ("Status", "Details")

_HEADER_ROWS = 2
_REPLACEMENT_CHARACTER = "\N{REPLACEMENT CHARACTER}"


@dataclass(frozen=True)
class _RunCounts:
    """Computed run-level counters for the RunInfo sheet."""

    total: int
    passed: int
    failed: int
    invalid: int


def write_results_workbook(
    output_path: Path | str,
    reports: Sequence[CaseReport],
    run_metadata: RunMetadata,
) -> None:
    """Write the run output workbook with one row per evaluated case."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = RESULTS_SHEET_NAME

    _write_group_headers(sheet)
    _write_column_headers(sheet)
    _write_case_rows(sheet, reports)

    _write_suite_sheet(workbook, run_metadata.suite_path)
    _write_run_info_sheet(workbook, run_metadata, reports)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)


def _write_group_headers(sheet) -> None:
    groups = (
        ("Case", 1, len(CASE_COLUMNS)),
        ("Outcome", len(CASE_COLUMNS) + 1, len(OUTCOME_COLUMNS)),
    )
    for label, start_column, count in groups:
        start_letter = get_column_letter(start_column)
        end_letter = get_column_letter(start_column + count - 1)
        sheet.merge_cells(f"{start_letter}1:{end_letter}1")
        sheet[f"{start_letter}1"].value = label
        sheet[f"{start_letter}1"].style = "Headline 1"


def _write_column_headers(sheet) -> None:
    for column_index, name in enumerate(CASE_COLUMNS + OUTCOME_COLUMNS, start=1):
        sheet.cell(row=2, column=column_index, value=name)
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )
    details_column = len(CASE_COLUMNS) + len(OUTCOME_COLUMNS)
    sheet.column_dimensions[get_column_letter(details_column)].width = 80


def _write_case_rows(sheet, reports: Sequence[CaseReport]) -> None:
    wrapped = Alignment(wrap_text=True, vertical="top")
    for row_number, report in enumerate(reports, start=_HEADER_ROWS + 1):
        values = (
            report.case_id,
            report.check,
            report.relation,
            "yes" if report.in_order else "no",
            report.description or "",
            report.status.value,
            report.details,
        )
        for column_index, value in enumerate(values, start=1):
            cell = sheet.cell(row=row_number, column=column_index, value=_cell_value(value))
            cell.alignment = wrapped


def _write_suite_sheet(workbook: Workbook, suite_path: Path) -> None:
    sheet = workbook.create_sheet(SUITE_SHEET_NAME)
    suite_text = suite_path.read_text(encoding="utf-8")
    suite_hash = hashlib.sha256(suite_text.encode("utf-8")).hexdigest()
    entries = (
        ("suite_path", str(suite_path)),
        ("suite_hash", suite_hash),
        ("suite_text", suite_text),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=_cell_value(value))


def _write_run_info_sheet(
    workbook: Workbook,
    run_metadata: RunMetadata,
    reports: Sequence[CaseReport],
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    counts = _calculate_run_counts(reports)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("suite_path", str(run_metadata.suite_path)),
        ("output_path", str(run_metadata.output_path)),
        ("fail_on_relation_exceptions", run_metadata.fail_on_relation_exceptions),
        ("total", counts.total),
        ("passed", counts.passed),
        ("failed", counts.failed),
        ("invalid", counts.invalid),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=_cell_value(value))


def _calculate_run_counts(reports: Sequence[CaseReport]) -> _RunCounts:
    return _RunCounts(
        total=len(reports),
        passed=sum(1 for report in reports if report.status == CaseStatus.PASSED),
        failed=sum(1 for report in reports if report.status == CaseStatus.FAILED),
        invalid=sum(1 for report in reports if report.status == CaseStatus.INVALID),
    )


def _cell_value(value: object) -> object:
    # Worksheets reject most ASCII control characters.
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub(_REPLACEMENT_CHARACTER, value)
    return value
