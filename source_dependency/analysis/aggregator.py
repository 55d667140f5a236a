"""Merge per-file parse results into path- and module-keyed dependency maps."""

from __future__ import annotations

import logging

from source_dependency.analysis.graph_models import (
    EXTERNAL_MODULE_PREFIX,
    Dependencies,
    DependencyInfo,
    is_external,
)
from source_dependency.analysis.resolver import PathResolver
from source_dependency.models import ParseResult

logger = logging.getLogger(__name__)


def merge_dependencies(existing: Dependencies, incoming: Dependencies) -> Dependencies:
    """Concatenate per-key lists, existing entries first. Inputs are left untouched."""
    result: Dependencies = {k: list(v) for k, v in existing.items()}
    for k, deps in incoming.items():
        result.setdefault(k, []).extend(deps)
    return result


def merge_results(existing: ParseResult, incoming: ParseResult) -> ParseResult:
    """Combine two partial results (e.g. from consecutive lines of a file)."""
    return ParseResult(
        module=incoming.module or existing.module,
        path_dependencies=existing.path_dependencies + incoming.path_dependencies,
        module_dependencies=merge_dependencies(
            existing.module_dependencies, incoming.module_dependencies,
        ),
    )


class Aggregator:
    """Running total of every file processed so far."""

    def __init__(self, resolver: PathResolver, module_separator: str = "/"):
        self.resolver = resolver
        self.info = DependencyInfo(module_separator=module_separator)

    def add(self, file: str, sub_dir: str, result: ParseResult) -> None:
        info = self.info
        if result.module:
            info.path_to_module[file] = result.module
            info.module_to_path.setdefault(result.module, file)

        resolved = [self.resolver.resolve(d, sub_dir) for d in result.path_dependencies]
        info.path_dependencies.setdefault(file, []).extend(resolved)
        for module, deps in result.module_dependencies.items():
            info.module_dependencies.setdefault(module, []).extend(deps)


def _module_to_path(name: str, info: DependencyInfo) -> str:
    if name in info.module_to_path:
        return info.module_to_path[name]
    if is_external(name) or name in info.path_dependencies:
        return name
    return EXTERNAL_MODULE_PREFIX + name


def _path_to_module(name: str, info: DependencyInfo) -> str:
    if name in info.path_to_module:
        return info.path_to_module[name]
    if name.startswith(EXTERNAL_MODULE_PREFIX):
        return name[len(EXTERNAL_MODULE_PREFIX):]
    return name


def _append_missing(target: Dependencies, key: str, values: list[str]) -> None:
    existing = target.setdefault(key, [])
    for v in values:
        if v not in existing:
            existing.append(v)


def cross_derive(info: DependencyInfo) -> DependencyInfo:
    """Fill each dependency map from the other one, in a single pass.

    Both directions read from snapshots taken before either is applied, and
    only append entries that are not already present, so applying this twice
    gives the same result as applying it once.
    """
    module_snapshot = {k: list(v) for k, v in info.module_dependencies.items()}
    path_snapshot = {k: list(v) for k, v in info.path_dependencies.items()}

    for module, deps in module_snapshot.items():
        path = info.module_to_path.get(module)
        if path is None or not deps:
            continue
        _append_missing(info.path_dependencies, path, [_module_to_path(d, info) for d in deps])

    for path, deps in path_snapshot.items():
        module = info.path_to_module.get(path)
        if module is None or not deps:
            continue
        _append_missing(info.module_dependencies, module, [_path_to_module(d, info) for d in deps])

    logger.debug(
        "cross derivation: %d path keys, %d module keys",
        len(info.path_dependencies), len(info.module_dependencies),
    )
    return info
