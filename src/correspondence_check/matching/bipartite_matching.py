"""Maximum cardinality bipartite matching by augmenting paths."""

from __future__ import annotations

from collections.abc import Sequence


def maximum_bipartite_matching(
    candidates_by_expected: Sequence[Sequence[int]],
    actual_count: int,
) -> dict[int, int]:
    """Return a maximum matching as a map from expected index to actual index.

    Expected indices are processed in ascending order and each one's candidate actual indices are
    tried in the order given, so ties between maximum matchings always resolve the same way.
    """
    owner_of_actual: list[int | None] = [None] * actual_count
    for expected_index in range(len(candidates_by_expected)):
        _augment_from(expected_index, candidates_by_expected, owner_of_actual)
    return {
        owner: actual_index
        for actual_index, owner in enumerate(owner_of_actual)
        if owner is not None
    }


def _augment_from(
    root_expected: int,
    candidates_by_expected: Sequence[Sequence[int]],
    owner_of_actual: list[int | None],
) -> bool:
    """Search an alternating path from `root_expected` to a free actual index and flip it.

    The depth-first search keeps its own stack so long alternating paths do not hit the
    interpreter recursion limit. `path[i]` is the actual index tried by the expected index of
    `stack[i]`.
    """
    visited = [False] * len(owner_of_actual)
    stack: list[list[int]] = [[root_expected, 0]]
    path: list[int] = []

    while stack:
        frame = stack[-1]
        expected_index, position = frame
        options = candidates_by_expected[expected_index]
        if position >= len(options):
            stack.pop()
            if path:
                path.pop()
            continue
        frame[1] = position + 1
        actual_index = options[position]
        if visited[actual_index]:
            continue
        visited[actual_index] = True
        path.append(actual_index)
        owner = owner_of_actual[actual_index]
        if owner is None:
            for (path_expected, _), path_actual in zip(stack, path, strict=True):
                owner_of_actual[path_actual] = path_expected
            return True
        stack.append([owner, 0])
    return False
