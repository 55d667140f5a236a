"""Data models for the source-dependency pipeline."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Callable

NameResolver = Callable[[str], "str | None"]


class UnsupportedLanguageError(ValueError):
    """Raised when a language service name is not registered."""


class UnsupportedFormatError(ValueError):
    """Raised when an output format name is not registered."""


class ConfigError(ValueError):
    """Raised for invalid configuration files or option values."""


@dataclass
class ParseResult:
    """What a language service reports for one file (or one line)."""
    module: str | None = None
    path_dependencies: list[str] = field(default_factory=list)
    module_dependencies: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class ParseContext:
    """Per-file view handed to a language service.

    A fresh context is built for every file; ``with_line`` derives the
    per-line variant used by line-based services.
    """
    root_dir: Path
    files: tuple[str, ...]
    file: str
    loader: Callable[[], str]
    name_resolver: NameResolver = lambda name: None
    options: dict[str, Any] = field(default_factory=dict)
    line: str = ""
    line_number: int = 0

    @property
    def sub_dir(self) -> str:
        parent = str(PurePosixPath(self.file).parent)
        return "" if parent == "." else parent

    @property
    def ext(self) -> str:
        return PurePosixPath(self.file).suffix

    @property
    def file_name(self) -> str:
        return PurePosixPath(self.file).name

    @property
    def full_path(self) -> Path:
        return self.root_dir / self.file

    def file_content(self) -> str:
        return self.loader()

    def lines(self) -> list[str]:
        return self.file_content().splitlines()

    def with_line(self, line: str, line_number: int) -> ParseContext:
        return dataclasses.replace(self, line=line, line_number=line_number)


@dataclass
class GraphConfig:
    """Configuration for a parse + normalize run."""
    target: Path = field(default_factory=lambda: Path("."))
    language: str = "typescript"
    input_filters: list[str] = field(default_factory=list)
    input_path_mapping: list[str] = field(default_factory=list)
    exclude_well_known_folders: bool = True
    exclude_external: bool = False
    result_filters: list[str] = field(default_factory=list)
    root_filters: list[str] = field(default_factory=list)
    prefix: str = ""
    depth: str = ""
    force_path_dependency: bool = False
    strict_matching: bool = False
    language_options: dict[str, Any] = field(default_factory=dict)
    output_format: str = "plain"
    output_file: Path | None = None
    cache_file: Path | None = None
    debug: bool = False
