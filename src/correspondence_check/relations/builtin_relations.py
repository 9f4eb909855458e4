"""Named relations available to check suites and the command line."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from .relation_models import Relation, equality, from_predicate, tolerance, transforming

_INTEGER_PATTERN = re.compile(r"^([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))$")

BUILTIN_RELATION_NAMES = (
    "equality",
    "parses_to_integer",
    "case_insensitive_equality",
    "within_tolerance",
    "same_string_representation",
)


class UnknownRelationError(ValueError):
    """Raised when a relation name or its parameters cannot be resolved."""


def build_relation(name: str, *, tolerance_value: float | None = None) -> Relation:
    """Resolve a built-in relation by name."""
    if name == "within_tolerance":
        if tolerance_value is None:
            raise UnknownRelationError("Relation 'within_tolerance' requires a tolerance.")
        return tolerance(tolerance_value).formatting_diffs_using(_format_numeric_difference)
    if tolerance_value is not None:
        raise UnknownRelationError(f"Relation '{name}' does not accept a tolerance.")
    if name == "equality":
        return equality()
    if name == "parses_to_integer":
        return from_predicate(_parses_to_integer, "parses to")
    if name == "case_insensitive_equality":
        return from_predicate(_equals_ignoring_case, "equals (ignoring case)")
    if name == "same_string_representation":
        return transforming(str, "has the same string representation as", expected_transform=str)
    known = ", ".join(BUILTIN_RELATION_NAMES)
    raise UnknownRelationError(f"Unknown relation '{name}'. Known relations: {known}.")


def parse_integer(text: str) -> int | None:
    """Parse a decimal or 0x-prefixed hexadecimal integer with an optional sign."""
    match = _INTEGER_PATTERN.fullmatch(text.strip())
    if not match:
        return None
    sign, hex_digits, decimal_digits = match.groups()
    magnitude = int(hex_digits, 16) if hex_digits is not None else int(decimal_digits)
    return -magnitude if sign == "-" else magnitude


def _parses_to_integer(actual: Any, expected: Any) -> bool:
    if actual is None:
        return expected is None
    if not isinstance(actual, str):
        return False
    parsed = parse_integer(actual)
    return parsed is not None and not isinstance(expected, bool) and parsed == expected


def _equals_ignoring_case(actual: Any, expected: Any) -> bool:
    return actual.casefold() == expected.casefold()


def _format_numeric_difference(actual: Any, expected: Any) -> str:
    difference = Decimal(str(actual)) - Decimal(str(expected))
    if difference == difference.to_integral_value():
        return str(int(difference))
    return str(difference.normalize())
