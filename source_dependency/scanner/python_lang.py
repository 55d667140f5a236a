"""Python import scanner (regex based, line by line; parenthesized import lists are joined first)."""

from __future__ import annotations

import re

from source_dependency.analysis.aggregator import merge_results
from source_dependency.models import ParseContext, ParseResult
from source_dependency.scanner.base import BaseLanguageService

_IMPORT_RE = re.compile(r"^\s*import\s+(.+?)\s*(?:#.*)?$")
_FROM_RE = re.compile(r"^\s*from\s+(\S+)\s+import\s+(.+?)\s*(?:#.*)?$")
_IMPORT_MODULE_RE = re.compile(r"""import_module\s*\(\s*(['"])(.+?)\1""")


def module_to_path(module: str) -> str:
    """``a.b`` -> ``a/b``; leading dots become ``./`` and ``../`` segments."""
    stripped = module.lstrip(".")
    dots = len(module) - len(stripped)
    if dots == 0:
        return stripped.replace(".", "/")
    prefix = "./" if dots == 1 else "../" * (dots - 1)
    return prefix + stripped.replace(".", "/")


class PythonService(BaseLanguageService):
    name = "python"
    description = "Python import / from-import / importlib.import_module"
    extensions = (".py",)
    candidate_suffixes = (".py", "/__init__.py")

    def parse(self, context: ParseContext) -> ParseResult:
        result = ParseResult()
        pending: list[str] = []
        start = 0
        for number, line in enumerate(context.lines(), start=1):
            if pending:
                pending.append(line.split("#")[0].strip())
                if ")" not in line:
                    continue
                line, number = " ".join(pending), start
                pending = []
            elif _FROM_RE.match(line) and "(" in line.split("#")[0] and ")" not in line:
                # parenthesized import list spanning several lines
                pending, start = [line.split("#")[0].rstrip()], number
                continue
            result = merge_results(result, self.parse_line(context.with_line(line, number)))
        return result

    def parse_line(self, context: ParseContext) -> ParseResult:
        line = context.line
        modules: list[str] = []

        m = _FROM_RE.match(line)
        if m:
            base, names = m.group(1), m.group(2)
            if base.strip(".") == "":
                # from . import a, b
                for name in names.strip("()").split(","):
                    name = name.split()[0] if name.split() else ""
                    if name and name != "*":
                        modules.append(base + name)
            else:
                modules.append(base)
        else:
            m = _IMPORT_RE.match(line)
            if m:
                for part in m.group(1).split(","):
                    words = part.split()
                    if words:
                        modules.append(words[0])

        m = _IMPORT_MODULE_RE.search(line)
        if m:
            modules.append(m.group(2))

        return ParseResult(path_dependencies=[module_to_path(mod) for mod in modules])
