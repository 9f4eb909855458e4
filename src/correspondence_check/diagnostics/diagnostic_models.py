"""Diagnostic domain entities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

SEPARATOR = "---"
_INDENT = "    "


@dataclass(frozen=True)
class Fact:
    """One line of a diagnostic; a fact without a value is printed as its key alone."""

    key: str
    value: str | None = None

    def __str__(self) -> str:
        return self.key if self.value is None else f"{self.key}: {self.value}"


@dataclass(frozen=True)
class Diagnostic:
    """Ordered facts explaining why a check failed."""

    facts: tuple[Fact, ...]

    @classmethod
    def of(cls, facts: Iterable[Fact]) -> Diagnostic:
        return cls(facts=tuple(facts))

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(item.key for item in self.facts)

    def value_of(self, key: str, index: int = 0) -> str | None:
        """Return the value of the `index`-th fact named `key`."""
        values = self.values_of(key)
        if index >= len(values):
            raise KeyError(f"Diagnostic has no fact #{index} named '{key}'.")
        return values[index]

    def values_of(self, key: str) -> tuple[str | None, ...]:
        return tuple(item.value for item in self.facts if item.key == key)

    def render(self) -> str:
        """Render facts one per line with values aligned after the longest key.

        When any value spans several lines, values are instead printed below their key and
        indented.
        """
        valued = [item for item in self.facts if item.value is not None]
        longest_key = max((len(item.key) for item in valued), default=0)
        multiline = any("\n" in (item.value or "") for item in valued)

        lines: list[str] = []
        for item in self.facts:
            if item.value is None:
                lines.append(item.key)
            elif multiline:
                lines.append(f"{item.key}:\n{_indent(item.value)}")
            else:
                lines.append(f"{item.key.ljust(longest_key)}: {item.value}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self.facts)


def fact(key: str, value: str) -> Fact:
    """Build a key/value fact."""
    return Fact(key=key, value=value)


def simple_fact(key: str) -> Fact:
    """Build a fact that has no value."""
    return Fact(key=key)


def _indent(value: str) -> str:
    return _INDENT + value.replace("\n", "\n" + _INDENT)
