"""Directed Graph Markup Language (Visual Studio) rendering."""

from __future__ import annotations

from xml.sax.saxutils import quoteattr

from source_dependency.analysis.graph_models import DependencyData

_HEADER = '<?xml version="1.0" encoding="utf-8"?>\n<DirectedGraph xmlns="http://schemas.microsoft.com/vs/2009/dgml">'


def generate_dgml(data: DependencyData) -> str:
    parents = dict.fromkeys(a for a, _ in data.flat_contains)
    nodes = dict.fromkeys(n for edge in data.flat_dependencies for n in edge)

    lines = [_HEADER, "<Nodes>"]
    for n in parents:
        lines.append(f'  <Node Id={quoteattr(n)} Label={quoteattr(n)} Group="Collapsed"/>')
    for n in nodes:
        if n not in parents:
            lines.append(f"  <Node Id={quoteattr(n)} Label={quoteattr(n)}/>")
    lines.append("</Nodes>")

    lines.append("<Links>")
    for a, b in data.flat_contains:
        lines.append(f'  <Link Source={quoteattr(a)} Target={quoteattr(b)} Category="Contains" />')
    for a, b in data.flat_dependencies:
        lines.append(f"  <Link Source={quoteattr(a)} Target={quoteattr(b)} />")
    lines.append("</Links>")
    lines.append("</DirectedGraph>")
    return "\n".join(lines)
