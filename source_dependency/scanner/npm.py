"""npm project scanner: package.json plus yarn.lock / package-lock.json.

Options (``--option key=value``):

- ``lock_file``: read ``yarn.lock``, then ``package-lock.json``, next to the
  manifest before falling back to the manifest itself.
- ``dev``: read ``devDependencies`` instead of ``dependencies`` from the
  manifest.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from source_dependency.models import ParseContext, ParseResult
from source_dependency.scanner.base import BaseLanguageService

logger = logging.getLogger(__name__)

PackageDependencies = dict[str, list[str]]


def _unquote(s: str) -> str:
    return s[1:-1] if len(s) >= 2 and s.startswith('"') and s.endswith('"') else s


def parse_yarn_lock(path: Path) -> PackageDependencies:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug("failed to read yarn lock file %s: %s", path, e)
        return {}

    logger.debug("parsing yarn lock file: %s", path)
    deps: PackageDependencies = {}
    for section in re.split(r"\r?\n\r?\n", content):
        lines = [ln.strip() for ln in section.splitlines() if ln.strip()]
        if not lines or lines[0].startswith("#"):
            continue
        packages = [_unquote(p.strip()) for p in lines[0].split(":")[0].split(",")]
        try:
            start = next(i for i, ln in enumerate(lines) if ln.startswith("dependencies:"))
        except StopIteration:
            requires: list[str] = []
        else:
            requires = []
            for ln in lines[start + 1:]:
                if ln.endswith(":"):
                    break
                requires.append("@".join(_unquote(w.strip()) for w in ln.split()))
        for pkg in packages:
            deps[pkg] = requires
    return deps


def parse_package_lock(path: Path) -> PackageDependencies:
    try:
        lock = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug("failed to parse npm lock file %s: %s", path, e)
        return {}

    if not isinstance(lock, dict):
        logger.debug("failed to parse npm lock file %s: not a JSON object", path)
        return {}

    packages = lock.get("packages") or {}
    if not isinstance(packages, dict):
        logger.debug("failed to parse npm lock file %s: packages is not an object", path)
        return {}

    logger.debug("parsing npm lock file: %s", path)
    deps: PackageDependencies = {}
    for key, pkg in packages.items():
        if not isinstance(pkg, dict):
            logger.debug("skipping malformed lock entry %r in %s", key, path)
            continue
        name = key or _package_name(pkg)
        requires = pkg.get("dependencies") or {}
        deps[name] = list(requires.keys()) if isinstance(requires, dict) else []
    return deps


def _package_name(pkg: dict) -> str:
    name = pkg.get("name")
    return name if isinstance(name, str) else ""


def read_manifest(text: str, source: str, dev: bool = False) -> tuple[str, list[str]] | None:
    """Package name and direct dependency names, or None when malformed."""
    try:
        pkg = json.loads(text)
    except ValueError as e:
        logger.debug("failed to parse %s: %s", source, e)
        return None
    if not isinstance(pkg, dict):
        logger.debug("failed to parse %s: not a JSON object", source)
        return None
    key = "devDependencies" if dev else "dependencies"
    section = pkg.get(key) or {}
    if not isinstance(section, dict):
        logger.debug("failed to parse %s: %s is not an object", source, key)
        return None
    return _package_name(pkg), list(section.keys())


class NpmService(BaseLanguageService):
    name = "npm"
    description = (
        "npm projects: package.json, or yarn.lock / package-lock.json "
        "with the lock_file option; dev=true reads devDependencies"
    )
    file_names = ("package.json",)

    def parse(self, context: ParseContext) -> ParseResult:
        options = context.options
        manifest = context.full_path
        logger.debug("parsing npm project %s with options %s", context.file, options)

        deps: PackageDependencies = {}
        if options.get("lock_file"):
            deps = parse_yarn_lock(manifest.parent / "yarn.lock")
            if not deps:
                deps = parse_package_lock(manifest.parent / "package-lock.json")

        parsed = read_manifest(context.file_content(), context.file, bool(options.get("dev")))
        module = parsed[0] if parsed and parsed[0] else None
        if not deps:
            logger.debug("parsing package.json directly")
            if parsed is None:
                return ParseResult()
            deps = {module or context.file: parsed[1]}

        logger.debug("dependencies: %s", deps)
        return ParseResult(module=module, module_dependencies=deps)
