"""Include/exclude regex filters over entity names and file paths."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from source_dependency.models import ConfigError


@dataclass
class TextFilters:
    include: list[re.Pattern[str]] = field(default_factory=list)
    exclude: list[re.Pattern[str]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.include or self.exclude)

    def matches(self, text: str) -> bool:
        """True when ``text`` passes: any include matches (if any), no exclude matches."""
        if self.include and not any(p.search(text) for p in self.include):
            return False
        return not any(p.search(text) for p in self.exclude)


def parse_filters(filters: Iterable[str]) -> TextFilters:
    """``-re`` excludes, ``+re`` or a bare ``re`` includes."""
    result = TextFilters()
    for f in filters:
        try:
            if f.startswith("-"):
                result.exclude.append(re.compile(f[1:]))
            elif f.startswith("+"):
                result.include.append(re.compile(f[1:]))
            else:
                result.include.append(re.compile(f))
        except re.error as e:
            raise ConfigError(f"invalid filter {f!r}: {e}") from e
    return result
