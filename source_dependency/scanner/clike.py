"""C / C++ #include scanner."""

from __future__ import annotations

import re

from source_dependency.models import ParseContext, ParseResult
from source_dependency.scanner.base import BaseLanguageService

_SYSTEM_INCLUDE_RE = re.compile(r"^\s*#\s*include\s*<([^\s>]+)>")
_LOCAL_INCLUDE_RE = re.compile(r'^\s*#\s*include\s*"([^\s"]+)"')


class CService(BaseLanguageService):
    name = "c"
    description = "C #include directives"
    extensions = (".c", ".h")

    def parse_line(self, context: ParseContext) -> ParseResult:
        deps: list[str] = []
        m = _SYSTEM_INCLUDE_RE.match(context.line)
        if m:
            deps.append(m.group(1))
        m = _LOCAL_INCLUDE_RE.match(context.line)
        if m:
            deps.append(m.group(1))
        return ParseResult(path_dependencies=deps)


class CppService(CService):
    name = "cpp"
    description = "C++ / Objective-C #include directives"
    extensions = (".c", ".cpp", ".h", ".hpp", ".cxx", ".cc", ".hh", ".m")
