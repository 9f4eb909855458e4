"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class CaseStatus(str, Enum):
    """Rendered status in the output workbook status column."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    INVALID = "INVALID"


@dataclass(frozen=True)
class CaseReport:
    """Evaluated check case as rendered into the Results sheet."""

    case_id: str
    check: str
    relation: str
    in_order: bool
    status: CaseStatus
    details: str = ""
    description: str | None = None


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    suite_path: Path
    output_path: Path
    fail_on_relation_exceptions: bool
