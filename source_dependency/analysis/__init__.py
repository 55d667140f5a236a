"""Dependency resolution and graph normalization."""

from source_dependency.analysis.aggregator import Aggregator, cross_derive, merge_dependencies
from source_dependency.analysis.cycles import find_cycles
from source_dependency.analysis.filters import TextFilters, parse_filters
from source_dependency.analysis.graph_models import (
    EXTERNAL_MODULE_PREFIX,
    EXTERNAL_PREFIX,
    DependencyData,
    DependencyInfo,
    Interior,
    Leaf,
    is_external,
)
from source_dependency.analysis.hierarchy import (
    build_hierarchy,
    collapse_hierarchy,
    flatten_hierarchy,
    walk_hierarchy,
)
from source_dependency.analysis.normalizer import NormalizeOptions, build_dependency_data
from source_dependency.analysis.resolver import PathResolver, cancel_dot, resolve_path

__all__ = [
    "Aggregator",
    "DependencyData",
    "DependencyInfo",
    "EXTERNAL_MODULE_PREFIX",
    "EXTERNAL_PREFIX",
    "Interior",
    "Leaf",
    "NormalizeOptions",
    "PathResolver",
    "TextFilters",
    "build_dependency_data",
    "build_hierarchy",
    "cancel_dot",
    "collapse_hierarchy",
    "cross_derive",
    "find_cycles",
    "flatten_hierarchy",
    "is_external",
    "merge_dependencies",
    "parse_filters",
    "resolve_path",
    "walk_hierarchy",
]
