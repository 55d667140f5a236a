"""Self-contained HTML page rendering the graph with vis.js."""

from __future__ import annotations

import json
from pathlib import Path

from source_dependency.analysis.graph_models import DependencyData

TEMPLATE_PATH = Path(__file__).parent / "templates" / "vis_template.html"


def _script_json(value: object) -> str:
    # keep "</script>" in a name from closing the script element
    return json.dumps(value).replace("</", "<\\/")


def generate_vis(data: DependencyData) -> str:
    names = list(dict.fromkeys(n for edge in data.flat_dependencies for n in edge))
    nodes = [{"id": n, "label": n, "shape": "box"} for n in names]
    edges = [{"from": a, "to": b, "arrows": "to"} for a, b in data.flat_dependencies]
    template = TEMPLATE_PATH.read_text(encoding="utf-8")
    return template.replace("__NODES", _script_json(nodes)).replace("__EDGES", _script_json(edges))
