"""Graphviz DOT rendering with nested clusters for the containment tree."""

from __future__ import annotations

import re

from source_dependency.analysis.graph_models import DependencyData, Interior, Leaf

THEME = ("#ffd0cc", "#d0ffcc", "#d0ccff")


def _quote(name: str) -> str:
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _cluster_id(name: str) -> str:
    return "cluster_" + re.sub(r"[^a-zA-Z0-9]", "_", name)


def _subgraph_statements(tree: Interior, nodes: set[str], depth: int = 0) -> list[str]:
    lines: list[str] = []
    for name, child in tree.children.items():
        if isinstance(child, Leaf):
            lines.append(_quote(name))
            continue
        lines.append(f"subgraph {_cluster_id(name)} {{")
        lines.append(f'style="rounded"; bgcolor="{THEME[depth % len(THEME)]}"; label={_quote(name)}')
        if name in nodes:
            lines.append(_quote(name))
        lines.extend(_subgraph_statements(child, nodes, depth + 1))
        lines.append("}")
    return lines


def generate_dot(data: DependencyData) -> str:
    nodes = {n for edge in data.flat_dependencies for n in edge}
    edges = [f"{_quote(a)} -> {_quote(b)}" for a, b in data.flat_dependencies]
    return "\n".join([
        "digraph {",
        "  overlap=false",
        *_subgraph_statements(data.contains, nodes),
        *edges,
        "}",
    ])
