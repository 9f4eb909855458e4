"""Facts describing exceptions captured while a check ran."""

from __future__ import annotations

import traceback

from correspondence_check.matching import ExceptionCategory, ExceptionRecord, ExceptionStore

from .diagnostic_models import SEPARATOR, Fact, fact, simple_fact
from .value_rendering import render_arguments


def describe_exception(record: ExceptionRecord) -> str:
    """Describe the call that raised, the exception and its traceback, closed by a separator."""
    exception = record.exception
    summary = "".join(traceback.format_exception_only(type(exception), exception)).strip()
    trace = "".join(traceback.format_tb(exception.__traceback__)).rstrip()
    lines = [f"{record.method_name}({render_arguments(record.arguments)}) threw {summary}"]
    if trace:
        lines.append(trace)
    lines.append(SEPARATOR)
    return "\n".join(lines)


def main_cause_facts(store: ExceptionStore, argument_label: str = "elements") -> list[Fact]:
    """Lead facts for a check that failed only because comparisons raised."""
    record = store.first(ExceptionCategory.COMPARE)
    if record is None:
        raise ValueError("No comparison exception was captured.")
    return [
        simple_fact(f"one or more exceptions were thrown while comparing {argument_label}"),
        *_record_facts(record),
    ]


def additional_info_facts(store: ExceptionStore, argument_label: str = "elements") -> list[Fact]:
    """Trailing facts noting every category of captured exception."""
    headings = {
        ExceptionCategory.COMPARE: f"while comparing {argument_label}",
        ExceptionCategory.KEYING: f"while keying {argument_label} for pairing",
        ExceptionCategory.FORMAT_DIFF: "while formatting diffs",
    }
    facts: list[Fact] = []
    for record in store.records():
        facts.append(
            simple_fact(
                f"additionally, one or more exceptions were thrown {headings[record.category]}"
            )
        )
        facts.extend(_record_facts(record))
    return facts


def _record_facts(record: ExceptionRecord) -> list[Fact]:
    facts = [fact("first exception", describe_exception(record))]
    if record.count > 1:
        facts.append(fact("total exceptions", str(record.count)))
    return facts
