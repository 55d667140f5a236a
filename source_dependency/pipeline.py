"""Pipeline orchestrator: discover -> parse -> resolve -> aggregate -> normalize."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from source_dependency.analysis.aggregator import Aggregator, cross_derive
from source_dependency.analysis.cycles import find_cycles
from source_dependency.analysis.filters import parse_filters
from source_dependency.analysis.graph_models import DependencyData, DependencyInfo
from source_dependency.analysis.normalizer import NormalizeOptions, build_dependency_data
from source_dependency.analysis.resolver import PathResolver
from source_dependency.config import parse_depth, parse_path_mapping
from source_dependency.models import ConfigError, GraphConfig, ParseContext, ParseResult
from source_dependency.scanner import BaseLanguageService, get_language_service

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class ProgressMarker:
    """Report progress only when another ``percent`` of the work is done."""

    def __init__(self, stage: str, total: int, callback: ProgressCallback | None, percent: int = 1):
        self.stage = stage
        self.total = total
        self.callback = callback
        self.current = 0
        self.step = max(1, total * percent // 100)
        self._reported = -1

    def advance(self, delta: int = 1) -> None:
        self.current += delta
        if self.callback is None:
            return
        bucket = self.current // self.step
        if bucket != self._reported or self.current == self.total:
            self._reported = bucket
            self.callback(self.stage, self.current, self.total)


def discover(config: GraphConfig, service: BaseLanguageService) -> tuple[Path, list[str]]:
    """Scan root and root-relative files for the configured target."""
    target = Path(config.target)
    if not target.exists():
        raise ConfigError(f"target does not exist: {target}")
    if target.is_file():
        return target.parent, [target.name]

    skip_dirs = None if config.exclude_well_known_folders else []
    files = service.collect_files(target, parse_filters(config.input_filters), skip_dirs)
    return target, files


def parse_file(service: BaseLanguageService, context: ParseContext) -> ParseResult:
    try:
        return service.parse(context)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("failed to read %s: %s", context.file, e)
        return ParseResult()


def run_parse(config: GraphConfig, progress: ProgressCallback | None = None) -> DependencyInfo:
    """Stage 1: parse every file and aggregate the raw dependency maps."""
    cache = Path(config.cache_file) if config.cache_file else None
    if cache is not None and cache.exists():
        logger.debug("loading cached dependency info from %s", cache)
        try:
            return DependencyInfo.model_validate_json(cache.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise ConfigError(f"invalid cache file {cache}: {e}") from e

    service = get_language_service(config.language)
    root, files = discover(config, service)
    logger.debug("root %s, %d files, language %s", root, len(files), service.name)

    name_resolver = parse_path_mapping(config.input_path_mapping)
    resolver = PathResolver(
        files,
        service.candidate_suffixes,
        strict=config.strict_matching,
        name_resolver=name_resolver,
    )
    aggregator = Aggregator(resolver, module_separator=service.module_separator)
    known = tuple(files)

    marker = ProgressMarker("Parsing", len(files), progress)
    for f in files:
        marker.advance()
        loader = functools.lru_cache(maxsize=None)(
            functools.partial((root / f).read_text, encoding="utf-8", errors="replace")
        )
        context = ParseContext(
            root_dir=root,
            files=known,
            file=f,
            loader=loader,
            name_resolver=name_resolver,
            options=config.language_options,
        )
        aggregator.add(f, context.sub_dir, parse_file(service, context))

    info = cross_derive(aggregator.info)

    if cache is not None:
        cache.write_text(info.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("wrote dependency cache %s", cache)
    return info


def normalize_options(config: GraphConfig) -> NormalizeOptions:
    internal_depth, external_depth = parse_depth(config.depth)
    return NormalizeOptions(
        exclude_external=config.exclude_external,
        result_filters=parse_filters(config.result_filters),
        root_filters=parse_filters(config.root_filters),
        prefix=config.prefix,
        internal_depth=internal_depth,
        external_depth=external_depth,
        force_path_dependency=config.force_path_dependency,
    )


def run_pipeline(config: GraphConfig, progress: ProgressCallback | None = None) -> DependencyData:
    """Parse (or load the cache) and normalize into renderer input."""
    options = normalize_options(config)
    info = run_parse(config, progress)
    if progress:
        progress("Normalizing", 0, 1)
    data = build_dependency_data(info, options)
    if progress:
        progress("Normalizing", 1, 1)
    return data


def run_check(data: DependencyData) -> list[list[str]]:
    return find_cycles(data.flat_dependencies)
