"""Capture of exceptions raised by relations and key functions during a check."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

_LOGGER = logging.getLogger(__name__)


class ExceptionCategory(str, Enum):
    """Phase of a check in which a captured exception was raised."""

    COMPARE = "compare"
    KEYING = "keying"
    FORMAT_DIFF = "format_diff"


@dataclass(frozen=True)
class ExceptionRecord:
    """First exception seen in one category, plus how many were seen in total."""

    category: ExceptionCategory
    method_name: str
    arguments: tuple[Any, ...]
    exception: Exception
    count: int = 1


class ExceptionStore:
    """Collects exceptions in scan order, keeping the first one per category.

    The store is created per check and shared by the matcher and the diagnostic builder.
    """

    def __init__(self) -> None:
        self._records: dict[ExceptionCategory, ExceptionRecord] = {}

    def record(
        self,
        category: ExceptionCategory,
        method_name: str,
        arguments: tuple[Any, ...],
        exception: Exception,
    ) -> None:
        _LOGGER.debug(
            "Captured %s from %s(%r): %r",
            type(exception).__name__,
            method_name,
            arguments,
            exception,
        )
        existing = self._records.get(category)
        if existing is None:
            self._records[category] = ExceptionRecord(
                category=category,
                method_name=method_name,
                arguments=arguments,
                exception=exception,
            )
            return
        self._records[category] = ExceptionRecord(
            category=existing.category,
            method_name=existing.method_name,
            arguments=existing.arguments,
            exception=existing.exception,
            count=existing.count + 1,
        )

    def first(self, category: ExceptionCategory) -> ExceptionRecord | None:
        return self._records.get(category)

    def count(self, category: ExceptionCategory) -> int:
        record = self._records.get(category)
        return 0 if record is None else record.count

    @property
    def has_compare_exceptions(self) -> bool:
        return ExceptionCategory.COMPARE in self._records

    def records(self) -> tuple[ExceptionRecord, ...]:
        """Return captured records in category order: compare, keying, format_diff."""
        return tuple(
            self._records[category] for category in ExceptionCategory if category in self._records
        )

    def __bool__(self) -> bool:
        return bool(self._records)
