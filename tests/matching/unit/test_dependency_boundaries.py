"""Boundary tests for the correspondence engine's internal dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_engine_packages_do_not_import_suite_or_reporting_layers() -> None:
    package_dir = _project_root() / "src" / "correspondence_check"
    engine_packages = ("relations", "multisets", "matching", "ordering", "diagnostics", "checks")
    forbidden_import_fragments = (
        "correspondence_check.configuration",
        "correspondence_check.results_writing",
        "correspondence_check.run_execution",
        "correspondence_check.cli",
        "import click",
        "import yaml",
        "import openpyxl",
    )

    for package in engine_packages:
        for module_path in sorted((package_dir / package).glob("*.py")):
            text = module_path.read_text(encoding="utf-8")
            for fragment in forbidden_import_fragments:
                assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"


def test_matching_core_does_not_depend_on_diagnostics() -> None:
    matching_dir = _project_root() / "src" / "correspondence_check" / "matching"

    for module_path in sorted(matching_dir.glob("*.py")):
        text = module_path.read_text(encoding="utf-8")
        assert "correspondence_check.diagnostics" not in text, module_path
        assert "correspondence_check.checks" not in text, module_path
