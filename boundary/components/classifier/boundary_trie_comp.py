"""
Namespace-path trie over boundary names.

Each node is one name segment. A node may host a boundary and still have
children, which is how nested boundaries ("A" and "A.B") coexist.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace

from boundary.helpers.dto.boundary_dto import Boundary
from boundary.helpers.names import split_name


@dataclass
class TrieNode:
    """One trie node: optional hosted boundary plus children keyed by segment."""

    boundary: Boundary | None = None
    children: dict[str, TrieNode] = field(default_factory=dict)


def build_trie(boundaries: Iterable[Boundary]) -> TrieNode:
    """Insert every boundary at the node matching its dotted name."""
    root = TrieNode()
    for boundary in boundaries:
        node = root
        for part in split_name(boundary.name):
            node = node.children.setdefault(part, TrieNode())
        node.boundary = boundary
    return root


def find_boundary(trie: TrieNode, module: str) -> Boundary | None:
    """
    Find the boundary owning a module: the deepest boundary on its path.

    Walks the module's segments down the trie, remembering the last node
    hosting a boundary. When descent runs out of matching children, the
    remembered boundary wins.
    """
    node = trie
    owner: Boundary | None = None
    for part in split_name(module):
        child = node.children.get(part)
        if child is None:
            break
        node = child
        if node.boundary is not None:
            owner = node.boundary
    return owner


def lookup_boundary(trie: TrieNode, name: str) -> Boundary | None:
    """Exact lookup of a boundary by name (no prefix fallback)."""
    node = trie
    for part in split_name(name):
        child = node.children.get(part)
        if child is None:
            return None
        node = child
    return node.boundary


def walk_boundaries(trie: TrieNode) -> Iterator[Boundary]:
    """
    Yield every boundary of the trie with its ancestor chain filled in.

    Ancestors are the enclosing boundaries, nearest first. A top-level
    boundary gets no ancestors of its own; its descendants still see the
    full namespace chain, the top-level boundary included.
    Children are visited in segment order so the output is deterministic.
    """
    yield from _walk(trie, ())


def _walk(node: TrieNode, enclosing: tuple[str, ...]) -> Iterator[Boundary]:
    if node.boundary is not None:
        yield replace(node.boundary, ancestors=() if node.boundary.top_level else enclosing)
        enclosing = (node.boundary.name, *enclosing)

    for part in sorted(node.children):
        yield from _walk(node.children[part], enclosing)
