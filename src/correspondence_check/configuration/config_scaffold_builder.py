"""Check suite scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_SUITE_FILENAME = "suite.yaml"

_SUITE_SCAFFOLD_TEMPLATE = """# Check suite template for correspondence-check.
# Replace every <REQUIRED> placeholder before running check or run.
# Replace <OPTIONAL> placeholders only when your cases need them.

settings:
  # Fail a passing check when the relation raised while comparing (default true).
  fail_on_relation_exceptions: true
  # Default relation for cases without their own relation.
  # Known relations: equality, parses_to_integer, case_insensitive_equality,
  # within_tolerance (requires tolerance), same_string_representation.
  relation:
    name: equality

cases:
  # check: contains | contains_any | contains_at_least | contains_exactly | contains_none
  #        | does_not_contain | contains_entry | does_not_contain_entry
  #        | contains_exactly_entries | contains_at_least_entries
  - id: "<REQUIRED>"
    check: contains_exactly
    description: "<OPTIONAL>"
    relation:
      name: parses_to_integer
    # in_order is supported by contains_exactly, contains_at_least and the entries checks.
    in_order: false
    # pair_by names a mapping field used to pair unmatched elements in failure messages.
    # pair_by: "<OPTIONAL>"
    actual:
      - "<REQUIRED>"
    expected:
      - "<REQUIRED>"
  - id: "<REQUIRED>"
    check: contains_at_least_entries
    relation:
      name: within_tolerance
      tolerance: 0.1
    actual:
      "<REQUIRED>": "<REQUIRED>"
    # Entries checks accept a mapping or a list of [key, value] pairs.
    expected:
      - ["<REQUIRED>", "<REQUIRED>"]
"""


def build_placeholder_suite() -> str:
    """Build a YAML check suite template with placeholders and inline guidance."""
    return _SUITE_SCAFFOLD_TEMPLATE


def write_placeholder_suite(output_path: Path | str) -> Path:
    """Write the placeholder check suite template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Check suite file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_suite(), encoding="utf-8")
    return destination.resolve()
