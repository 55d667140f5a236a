"""Renderer registry."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from source_dependency.analysis.graph_models import DependencyData
from source_dependency.exporter.dgml_exporter import generate_dgml
from source_dependency.exporter.dot_exporter import generate_dot
from source_dependency.exporter.text_exporter import (
    generate_js,
    generate_json,
    generate_plain,
    generate_raw,
)
from source_dependency.exporter.vis_exporter import generate_vis
from source_dependency.models import UnsupportedFormatError

Generator = Callable[[DependencyData], str]

_GENERATORS: dict[str, tuple[Generator, str]] = {
    "plain": (generate_plain, "Plain text, one `a -> b` line per dependency"),
    "dot": (generate_dot, "Graphviz DOT, commonly used in real world"),
    "dgml": (generate_dgml, "Directed Graph Markup Language, well supported by Visual Studio"),
    "js": (generate_js, "JavaScript, the dependency data assigned to `const data`"),
    "json": (generate_json, "Dependency data as JSON"),
    "vis": (generate_vis, "An HTML visualization powered by vis.js"),
    "raw": (generate_raw, "Raw parse result (path/module maps) as JSON"),
}

_EXTENSIONS = {
    ".txt": "plain",
    ".dot": "dot",
    ".gv": "dot",
    ".dgml": "dgml",
    ".js": "js",
    ".json": "json",
    ".html": "vis",
    ".htm": "vis",
}


def generate_output(fmt: str, data: DependencyData) -> str:
    try:
        generator = _GENERATORS[fmt][0]
    except KeyError:
        raise UnsupportedFormatError(
            f"unknown output format: {fmt} (supported: {', '.join(_GENERATORS)})"
        ) from None
    return generator(data)


def get_all_generators() -> list[tuple[str, str]]:
    return [(name, desc) for name, (_, desc) in _GENERATORS.items()]


def format_for_file(path: Path | str | None, default: str = "plain") -> str:
    """Deduce the output format from an output file extension."""
    if not path:
        return default
    return _EXTENSIONS.get(Path(path).suffix.lower(), default)


__all__ = ["format_for_file", "generate_output", "get_all_generators"]
