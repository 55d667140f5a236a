"""Plain-text and JSON renderings."""

from __future__ import annotations

import json

from source_dependency.analysis.graph_models import DependencyData


def generate_plain(data: DependencyData) -> str:
    return "\n".join(f"{a} -> {b}" for a, b in data.flat_dependencies)


def generate_json(data: DependencyData) -> str:
    return json.dumps(data.to_dict(), indent=4)


def generate_js(data: DependencyData) -> str:
    return "const data = " + generate_json(data) + ";"


def generate_raw(data: DependencyData) -> str:
    return data.raw_info.model_dump_json(indent=4)
