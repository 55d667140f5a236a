"""Abstract base language service and file discovery."""

from __future__ import annotations

import abc
import fnmatch
from pathlib import Path

from source_dependency.analysis.aggregator import merge_results
from source_dependency.analysis.filters import TextFilters
from source_dependency.models import ParseContext, ParseResult

WELL_KNOWN_AUXILIARY_DIRS = [".git", "node_modules"]


class BaseLanguageService(abc.ABC):
    """Base class for language-specific dependency parsers.

    Subclasses override either ``parse`` (whole file) or ``parse_line``
    (called once per line; the partial results are merged).
    """

    name: str
    description: str = ""
    extensions: tuple[str, ...] = ()
    file_names: tuple[str, ...] = ()
    module_separator: str = "/"
    candidate_suffixes: tuple[str, ...] = ()

    def handles(self, file: str) -> bool:
        p = Path(file)
        if self.file_names:
            return p.name in self.file_names
        return p.suffix in self.extensions

    def parse(self, context: ParseContext) -> ParseResult:
        result = ParseResult()
        for number, line in enumerate(context.lines(), start=1):
            result = merge_results(result, self.parse_line(context.with_line(line, number)))
        return result

    def parse_line(self, context: ParseContext) -> ParseResult:
        raise NotImplementedError(f"{self.name} does not parse line by line")

    def collect_files(
        self,
        directory: Path,
        filters: TextFilters | None = None,
        skip_dirs: list[str] | None = None,
    ) -> list[str]:
        """Recursively list handled files, relative to ``directory`` with ``/`` separators."""
        skip_dirs = WELL_KNOWN_AUXILIARY_DIRS if skip_dirs is None else skip_dirs
        files: list[str] = []
        for path in sorted(directory.rglob("*")):
            if path.is_dir():
                continue
            rel = path.relative_to(directory).as_posix()
            if self._should_skip(rel, skip_dirs):
                continue
            if filters and not filters.matches(rel):
                continue
            if self.handles(rel):
                files.append(rel)
        return files

    @staticmethod
    def _should_skip(rel: str, skip_dirs: list[str]) -> bool:
        for part in rel.split("/")[:-1]:
            for pattern in skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
