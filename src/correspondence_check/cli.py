"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from correspondence_check.configuration import DEFAULT_SUITE_FILENAME, write_placeholder_suite
from correspondence_check.results_writing import CaseReport, CaseStatus
from correspondence_check.run_execution import (
    RunExecutionError,
    RunRequest,
    evaluate_suite,
    execute_suite_run,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "correspondence_check.cli"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="correspondence-check")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Correspondence-based collection checks with readable failure diagnostics."""
    if verbose:
        _enable_debug_logging()


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_SUITE_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML check suite template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML check suite with guidance comments."""
    try:
        resolved_output = write_placeholder_suite(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="check")
@click.option(
    "--suite",
    "suite_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON check suite file",
)
@click.option(
    "--case",
    "case_ids",
    multiple=True,
    help="Evaluate only the case with this id (repeatable)",
)
def check_suite(suite_path: str, case_ids: tuple[str, ...]) -> None:
    """Evaluate check suite cases and print a diagnostic for every failure."""
    try:
        evaluation = evaluate_suite(suite_path, case_ids)
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for report in evaluation.reports:
        click.echo(_format_report(report))
    click.echo(
        f"{evaluation.count(CaseStatus.PASSED)} passed, "
        f"{evaluation.count(CaseStatus.FAILED)} failed, "
        f"{evaluation.count(CaseStatus.INVALID)} invalid"
    )
    if not evaluation.all_passed:
        raise click.exceptions.Exit(1)


@cli.command(name="run")
@click.option(
    "--suite",
    "suite_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON check suite file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for storing result workbooks",
)
def run_suite(suite_path: str, output_dir: str | None) -> None:
    """Evaluate every case of a check suite and write a results workbook."""
    try:
        outcome = execute_suite_run(RunRequest(suite_path=suite_path, output_dir=output_dir))
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_path))


def _format_report(report: CaseReport) -> str:
    line = f"{report.status.value} {report.case_id} ({report.check})"
    if not report.details:
        return line
    indented = "\n".join(f"    {detail}" for detail in report.details.splitlines())
    return f"{line}\n{indented}"


def _enable_debug_logging() -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger = logging.getLogger("correspondence_check")
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
