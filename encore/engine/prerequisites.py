"""Prerequisite checks shared by tech upgrades and platforms.

Both content tables declare a tuple of ids that must be owned first. The
tables must form a DAG; ``validate_prerequisite_graph`` rejects cycles and
dangling references.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping


class PrerequisiteGraphError(ValueError):
    """A content table's prerequisites are not a valid DAG."""


def missing_prerequisites(required: Iterable[str], owned: Collection[str]) -> list[str]:
    """Return the required ids that are not owned, in declaration order."""
    return [req for req in required if req not in owned]


def prerequisites_met(required: Iterable[str], owned: Collection[str]) -> bool:
    return not missing_prerequisites(required, owned)


def validate_prerequisite_graph(graph: Mapping[str, Iterable[str]]) -> None:
    """Raise PrerequisiteGraphError on an unknown reference or a cycle."""
    deps = {node: tuple(reqs) for node, reqs in graph.items()}
    for node, reqs in deps.items():
        for req in reqs:
            if req not in deps:
                raise PrerequisiteGraphError(f"{node!r} requires unknown id {req!r}")

    # Iterative DFS: 0 = unvisited, 1 = on stack, 2 = done
    mark: dict[str, int] = dict.fromkeys(deps, 0)
    for root in deps:
        if mark[root]:
            continue
        stack: list[tuple[str, int]] = [(root, 0)]
        mark[root] = 1
        while stack:
            node, idx = stack[-1]
            reqs = deps[node]
            if idx < len(reqs):
                stack[-1] = (node, idx + 1)
                nxt = reqs[idx]
                if mark[nxt] == 1:
                    raise PrerequisiteGraphError(f"prerequisite cycle through {nxt!r}")
                if mark[nxt] == 0:
                    mark[nxt] = 1
                    stack.append((nxt, 0))
            else:
                mark[node] = 2
                stack.pop()
