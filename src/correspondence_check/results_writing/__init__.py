"""Results writing domain exports."""

from .report_models import CaseReport, CaseStatus, RunMetadata
from .run_report_writer import RESULTS_SHEET_NAME, RUN_INFO_SHEET_NAME, write_results_workbook

__all__ = [
    "CaseReport",
    "CaseStatus",
    "RunMetadata",
    "RESULTS_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "write_results_workbook",
]
