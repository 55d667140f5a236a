"""Turn a raw dependency map into the edge set renderers consume.

Stages run in a fixed order (each one assumes the previous ones ran):
external handling, text filtering, root-set restriction, flattening, prefix
stripping, depth collapsing. The containment tree is then built from the
surviving edge endpoints and collapsed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from source_dependency.analysis.filters import TextFilters
from source_dependency.analysis.graph_models import (
    EXTERNAL_PREFIX,
    Dependencies,
    DependencyData,
    DependencyInfo,
    Edge,
    is_external,
)
from source_dependency.analysis.hierarchy import (
    build_hierarchy,
    collapse_hierarchy,
    flatten_hierarchy,
)

logger = logging.getLogger(__name__)


@dataclass
class NormalizeOptions:
    exclude_external: bool = False
    result_filters: TextFilters = field(default_factory=TextFilters)
    root_filters: TextFilters = field(default_factory=TextFilters)
    prefix: str = ""
    internal_depth: int = 0
    external_depth: int = 0
    force_path_dependency: bool = False


def mark_external(deps: Dependencies, exclude: bool) -> Dependencies:
    """Drop (``exclude``) or tag every target that is not itself a key."""
    result: Dependencies = {}
    for key, targets in deps.items():
        kept = []
        for t in targets:
            if t in deps:
                kept.append(t)
            elif exclude:
                continue
            elif is_external(t):
                kept.append(t)
            else:
                kept.append(EXTERNAL_PREFIX + t)
        result[key] = kept
    return result


def filter_entities(deps: Dependencies, filters: TextFilters) -> Dependencies:
    if not filters:
        return {k: list(v) for k, v in deps.items()}
    return {
        key: [t for t in targets if filters.matches(t)]
        for key, targets in deps.items()
        if filters.matches(key)
    }


def restrict_to_roots(deps: Dependencies, root_filters: TextFilters) -> Dependencies:
    """Keep only what is reachable from the keys that pass ``root_filters``."""
    if not root_filters:
        return deps
    reachable = {k for k in deps if root_filters.matches(k)}
    frontier = list(reachable)
    while frontier:
        name = frontier.pop()
        for t in deps.get(name, []):
            if t not in reachable:
                reachable.add(t)
                frontier.append(t)
    logger.debug("root restriction keeps %d of %d entities", len(reachable), len(deps))
    return {k: v for k, v in deps.items() if k in reachable}


def flatten_dependencies(deps: Dependencies) -> list[Edge]:
    """Ordered, de-duplicated edges, without self-edges."""
    seen: set[Edge] = set()
    edges: list[Edge] = []
    for key, targets in deps.items():
        for t in targets:
            edge = (key, t)
            if key == t or edge in seen:
                continue
            seen.add(edge)
            edges.append(edge)
    return edges


def trim_prefix(name: str, prefix: str) -> str:
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def strip_prefix(edges: list[Edge], prefix: str) -> list[Edge]:
    if not prefix:
        return list(edges)
    return [(trim_prefix(a, prefix), trim_prefix(b, prefix)) for a, b in edges]


def strip_by_depth(name: str, depth: int, separator: str) -> str:
    if depth == 0:
        return name
    return separator.join(name.split(separator)[:depth])


def collapse_depth(
    edges: list[Edge],
    internal_depth: int,
    external_depth: int,
    separator: str,
    internal: set[str],
) -> list[Edge]:
    """Truncate names to their first N segments, then drop self-edges and duplicates.

    Internal names (those in ``internal``, or a leading part of one) use
    ``internal_depth``, everything else ``external_depth``. A depth of 0
    leaves the name as it is.
    """
    internal = set(internal)
    for name in list(internal):
        parts = name.split(separator)
        internal.update(separator.join(parts[:i]) for i in range(1, len(parts)))

    seen: set[Edge] = set()
    result: list[Edge] = []
    for a, b in edges:
        ca = strip_by_depth(a, internal_depth if a in internal else external_depth, separator)
        cb = strip_by_depth(b, internal_depth if b in internal else external_depth, separator)
        if not ca or not cb or ca == cb or (ca, cb) in seen:
            continue
        seen.add((ca, cb))
        result.append((ca, cb))
    return result


def select_dependencies(info: DependencyInfo, force_path_dependency: bool = False) -> tuple[Dependencies, str]:
    """The map to graph and its separator: module map when there is one."""
    if info.module_dependencies and not force_path_dependency:
        return info.module_dependencies, info.module_separator
    return info.path_dependencies, "/"


def build_dependency_data(info: DependencyInfo, options: NormalizeOptions | None = None) -> DependencyData:
    options = options or NormalizeOptions()
    raw, separator = select_dependencies(info, options.force_path_dependency)

    deps = mark_external(raw, options.exclude_external)
    deps = filter_entities(deps, options.result_filters)
    deps = restrict_to_roots(deps, options.root_filters)

    edges = flatten_dependencies(deps)
    edges = strip_prefix(edges, options.prefix)
    if options.internal_depth or options.external_depth:
        internal = {trim_prefix(k, options.prefix) for k in deps}
        edges = collapse_depth(
            edges, options.internal_depth, options.external_depth, separator, internal,
        )

    contains = build_hierarchy([name for edge in edges for name in edge], separator)
    flat_contains = collapse_hierarchy(flatten_hierarchy(contains), edges)
    logger.debug("graph: %d edges, %d containment edges", len(edges), len(flat_contains))

    return DependencyData(
        raw_info=info,
        dependencies=deps,
        flat_dependencies=edges,
        contains=contains,
        flat_contains=flat_contains,
        separator=separator,
    )
