"""
Dependency cycle detection.

The boundary graph has one vertex per boundary and one edge per declared
dependency. For every vertex the shortest cycle through it is searched
(breadth-first); cycles closing over the same vertex set are reported once.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping

from boundary.components.diagnostics.violation_comp import cycle_violation
from boundary.helpers.dto.view_dto import View
from boundary.helpers.dto.violation_dto import Violation


def find_cycles(graph: Mapping[str, Iterable[str]]) -> list[tuple[str, ...]]:
    """
    Find the distinct short cycles of a directed graph.

    Args:
        graph: Vertex -> successors. Edges to unknown vertices are ignored.

    Returns:
        Cycles as vertex paths that start and end on the same vertex
        (("A", "B", "A")), deduplicated by vertex set, in vertex order.
    """
    adjacency = {vertex: sorted(set(successors) & set(graph)) for vertex, successors in graph.items()}

    cycles: list[tuple[str, ...]] = []
    seen: set[frozenset[str]] = set()

    for vertex in sorted(adjacency):
        cycle = _shortest_cycle(adjacency, vertex)
        if cycle is None:
            continue
        key = frozenset(cycle)
        if key not in seen:
            seen.add(key)
            cycles.append(cycle)

    return cycles


def _shortest_cycle(adjacency: Mapping[str, list[str]], start: str) -> tuple[str, ...] | None:
    parents: dict[str, str] = {}
    queue: deque[str] = deque([start])

    while queue:
        vertex = queue.popleft()
        for successor in adjacency[vertex]:
            if successor == start:
                path = [vertex]
                while path[-1] != start:
                    path.append(parents[path[-1]])
                return (*reversed(path), start)
            if successor not in parents:
                parents[successor] = vertex
                queue.append(successor)

    return None


def dependency_cycles(view: View) -> list[Violation]:
    """Report every dependency cycle between boundaries as a build-wide violation."""
    graph = {name: boundary.dep_names for name, boundary in view.boundaries.items()}
    return [cycle_violation(cycle) for cycle in find_cycles(graph)]
