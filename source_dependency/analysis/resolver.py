"""Resolve raw import strings to files inside the scanned tree."""

from __future__ import annotations

import logging
from typing import Sequence

from source_dependency.analysis.graph_models import EXTERNAL_PREFIX
from source_dependency.models import NameResolver

logger = logging.getLogger(__name__)


def cancel_dot(path: str) -> str:
    """Collapse ``.`` and ``..`` segments without touching the filesystem.

    >>> cancel_dot("a/b/c/../../e/./f")
    'a/e/f'

    A ``..`` with nothing left to pop is dropped.
    """
    kept: list[str] = []
    for part in path.split("/"):
        if part == ".":
            continue
        if part == "..":
            if kept:
                kept.pop()
            continue
        kept.append(part)
    return "/".join(kept)


def join_path(parent: str, child: str) -> str:
    """``posixpath.join`` restricted to ``/`` and an empty-string root."""
    return child if parent == "" else parent + "/" + child


def resolve_path(
    raw: str,
    current_dir: str,
    known_files: Sequence[str],
    candidate_suffixes: Sequence[str] = (),
    strict: bool = False,
) -> str | None:
    """Return the first known file matching ``raw`` or one of its suffixed forms."""
    for candidate in [raw, *(raw + s for s in candidate_suffixes)]:
        normalized = cancel_dot(candidate)
        if candidate.startswith("/"):
            joined = normalized.lstrip("/")
        else:
            joined = cancel_dot(join_path(current_dir, candidate))
        for f in known_files:
            if f == joined:
                return f
            if strict:
                continue
            if f == normalized or f.endswith("/" + normalized):
                return f
    return None


class PathResolver:
    """Resolve raw references against one snapshot of the tree."""

    def __init__(
        self,
        known_files: Sequence[str],
        candidate_suffixes: Sequence[str] = (),
        strict: bool = False,
        name_resolver: NameResolver | None = None,
    ):
        self.known_files = list(known_files)
        self.candidate_suffixes = list(candidate_suffixes)
        self.strict = strict
        self.name_resolver = name_resolver

    def lookup(self, raw: str, current_dir: str) -> str | None:
        found = resolve_path(raw, current_dir, self.known_files, self.candidate_suffixes, self.strict)
        if found is not None or self.name_resolver is None:
            return found
        mapped = self.name_resolver(cancel_dot(raw))
        if mapped is None or mapped == raw:
            return None
        logger.debug("remapped %s => %s", raw, mapped)
        return resolve_path(mapped, current_dir, self.known_files, self.candidate_suffixes, self.strict)

    def resolve(self, raw: str, current_dir: str) -> str:
        """Resolved file path, or ``raw`` tagged as external."""
        found = self.lookup(raw, current_dir)
        if found is None:
            return EXTERNAL_PREFIX + raw
        return found
