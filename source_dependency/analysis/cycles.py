"""Cycle detection over flat dependency edges."""

from __future__ import annotations

from typing import Sequence

from source_dependency.analysis.graph_models import Edge


def _prune_dead_ends(edges: list[Edge]) -> list[Edge]:
    """Drop edges whose target has no outgoing edge, until nothing changes."""
    while True:
        sources = {a for a, _ in edges}
        kept = [e for e in edges if e[1] in sources]
        if len(kept) == len(edges):
            return kept
        edges = kept


def find_cycles(edges: Sequence[Edge]) -> list[list[str]]:
    """Find cycles greedily; each cycle repeats its first node at the end.

    After pruning, walking forward from any remaining edge must eventually
    revisit an edge. The revisited suffix of the walk is reported and every
    edge on the walk is removed before searching again. Cycles that share
    edges with an earlier one can be missed.
    """
    remaining = [tuple(e) for e in edges]
    cycles: list[list[str]] = []

    while True:
        remaining = _prune_dead_ends(remaining)
        if not remaining:
            break

        walk = [0]
        while True:
            target = remaining[walk[-1]][1]
            nxt = next(i for i, e in enumerate(remaining) if e[0] == target)
            if nxt in walk:
                start = walk.index(nxt)
                cycles.append([remaining[i][0] for i in walk[start:]] + [remaining[nxt][0]])
                break
            walk.append(nxt)

        visited = set(walk)
        remaining = [e for i, e in enumerate(remaining) if i not in visited]

    return cycles
