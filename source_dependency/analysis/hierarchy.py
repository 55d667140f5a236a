"""Containment hierarchy: build, walk, flatten and collapse."""

from __future__ import annotations

import re
from typing import Callable, Iterable

from source_dependency.analysis.graph_models import Edge, Interior, Leaf


def _prefixes(name: str, separator: str | re.Pattern[str]) -> list[str]:
    if not separator:
        return [name] if name else []
    pattern = separator if isinstance(separator, re.Pattern) else re.compile(re.escape(separator))
    keys = [name[:m.start()] for m in pattern.finditer(name)]
    keys.append(name)
    return [k for k in keys if k]


def build_hierarchy(
    entities: Iterable[str],
    separator: str | re.Pattern[str],
    tree: Interior | None = None,
) -> Interior:
    """Nest every entity under each of its non-empty name prefixes.

    An entity that is already an interior node (because a deeper entity was
    inserted first) stays interior; a leaf is upgraded to an interior node
    when a deeper entity shows up later.
    """
    root = tree if tree is not None else Interior()
    for name in entities:
        node = root
        keys = _prefixes(name, separator)
        for i, key in enumerate(keys):
            child = node.children.get(key)
            if child is None or isinstance(child, Leaf):
                child = Leaf() if i == len(keys) - 1 else Interior()
                node.children[key] = child
            if isinstance(child, Leaf):
                break
            node = child
    return root


def walk_hierarchy(
    tree: Interior,
    visitor: Callable[[str, str], None],
    name: str | None = None,
) -> None:
    """Call ``visitor(parent, child)`` for every edge below the synthetic root."""
    for key, child in tree.children.items():
        if name is not None:
            visitor(name, key)
        if isinstance(child, Interior):
            walk_hierarchy(child, visitor, key)


def flatten_hierarchy(tree: Interior) -> list[Edge]:
    edges: list[Edge] = []
    walk_hierarchy(tree, lambda parent, child: edges.append((parent, child)))
    return edges


def collapse_hierarchy(
    flat_contains: Iterable[Edge],
    flat_dependencies: Iterable[Edge],
    root: str = "",
) -> list[Edge]:
    """Splice out single-child containment nodes that have no dependency edges.

    Runs to a fixpoint; every splice removes one containment edge.
    """
    edges = [list(e) for e in flat_contains]
    connected = set()
    for a, b in flat_dependencies:
        connected.add(a)
        connected.add(b)

    while True:
        child_counts: dict[str, int] = {}
        for parent, _ in edges:
            child_counts[parent] = child_counts.get(parent, 0) + 1
        trivial = next(
            (
                e for e in edges
                if e[0] != root and child_counts[e[0]] == 1 and e[0] not in connected
            ),
            None,
        )
        if trivial is None:
            break
        for e in edges:
            if e[1] == trivial[0]:
                e[1] = trivial[1]
                break
        edges.remove(trivial)

    return [(a, b) for a, b in edges]
