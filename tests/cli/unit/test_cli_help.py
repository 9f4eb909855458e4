"""CLI smoke tests."""

from click.testing import CliRunner
from correspondence_check.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "check" in result.output
    assert "run" in result.output


def test_check_help_lists_repeatable_case_option() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["check", "--help"])

    assert result.exit_code == 0
    assert "--suite" in result.output
    assert "--case" in result.output
