"""Check result entities and caller-facing errors."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from correspondence_check.diagnostics import Diagnostic, simple_fact
from correspondence_check.matching import Pairing


class CheckInputError(ValueError):
    """Raised before any matching when a check is called with unusable inputs."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.render())
        self.diagnostic = diagnostic

    @classmethod
    def with_message(cls, message: str) -> CheckInputError:
        return cls(Diagnostic.of([simple_fact(message)]))


class CorrespondenceAssertionError(AssertionError):
    """Raised by `CheckResult.raise_for_failure()` with the rendered diagnostic as message."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.render())
        self.diagnostic = diagnostic


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check.

    A passing result carries the pairing that satisfied it (when the check pairs elements) and,
    when relation exceptions were tolerated, notes describing them. A failing result carries the
    diagnostic.
    """

    passed: bool
    pairing: Pairing | None = None
    diagnostic: Diagnostic | None = None
    notes: Diagnostic | None = None
    order_check: Callable[[], CheckResult] | None = field(default=None, repr=False, compare=False)

    def in_order(self) -> CheckResult:
        """Return the result of additionally requiring matched elements to appear in order.

        A failed result is returned unchanged, as is the result of a check that has no order.
        """
        if not self.passed or self.order_check is None:
            return self
        return self.order_check()

    def raise_for_failure(self) -> CheckResult:
        if not self.passed:
            raise CorrespondenceAssertionError(self.diagnostic or Diagnostic.of([]))
        return self

    def __bool__(self) -> bool:
        return self.passed
