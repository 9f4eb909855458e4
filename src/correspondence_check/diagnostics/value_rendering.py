"""String rendering of checked values inside diagnostic facts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from correspondence_check.multisets import ElementGroup, EquivalenceKey, group_equivalent_values


def render_value(value: Any) -> str:
    """Render one value: strings bare, lists and tuples as `[a, b]`, mappings as `{k=v}`."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return render_map(value)
    if isinstance(value, list | tuple):
        return render_list(value)
    return repr(value)


def render_list(values: Iterable[Any]) -> str:
    return "[" + ", ".join(render_value(value) for value in values) + "]"


def render_map(mapping: Mapping[Any, Any]) -> str:
    return "{" + ", ".join(render_entry(key, value) for key, value in mapping.items()) + "}"


def render_entry(key: Any, value: Any) -> str:
    return f"{render_value(key)}={render_value(value)}"


def render_entries(entries: Sequence[tuple[Any, Any]]) -> str:
    return "{" + ", ".join(render_entry(key, value) for key, value in entries) + "}"


def render_counted(values: Sequence[Any], equivalence_key: EquivalenceKey | None = None) -> str:
    """Render values with duplicates collapsed, e.g. `128 [2 copies], 256`."""
    return render_groups(group_equivalent_values(values, equivalence_key))


def render_groups(groups: Sequence[ElementGroup]) -> str:
    return ", ".join(_render_group(group) for group in groups)


def render_arguments(arguments: Sequence[Any]) -> str:
    return ", ".join(render_value(argument) for argument in arguments)


def _render_group(group: ElementGroup) -> str:
    rendered = render_value(group.representative)
    if group.count == 1:
        return rendered
    return f"{rendered} [{group.count} copies]"
