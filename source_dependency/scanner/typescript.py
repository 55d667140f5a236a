"""TypeScript/JavaScript service using regex patterns."""

from __future__ import annotations

import re

from source_dependency.models import ParseContext, ParseResult
from source_dependency.scanner.base import BaseLanguageService

# import x from '...', export { y } from '...', possibly spanning lines
_FROM_RE = re.compile(
    r"""^\s*(?:import|export)\b[^;'"]*?\bfrom\s+['"]([^'"]+)['"]""",
    re.MULTILINE | re.DOTALL,
)
# import '...' (side effects only)
_BARE_IMPORT_RE = re.compile(r"""^\s*import\s+['"]([^'"]+)['"]""", re.MULTILINE)
# require('...') and import('...')
_CALL_RE = re.compile(r"""\b(?:require|import)\s*\(\s*['"]([^'"]+)['"]\s*\)""")


class TypeScriptService(BaseLanguageService):
    name = "typescript"
    description = "TypeScript import/export/require statements"
    extensions = (".ts", ".tsx")

    @property
    def candidate_suffixes(self) -> tuple[str, ...]:
        return (
            *self.extensions,
            *(f"/index{ext}" for ext in self.extensions),
        )

    def parse(self, context: ParseContext) -> ParseResult:
        source = context.file_content()
        found: list[tuple[int, str]] = []
        for pattern in (_FROM_RE, _BARE_IMPORT_RE, _CALL_RE):
            for m in pattern.finditer(source):
                found.append((m.start(1), m.group(1)))
        found.sort()

        deps: list[str] = []
        for _, dep in found:
            if dep not in deps:
                deps.append(dep)
        return ParseResult(path_dependencies=deps)


class JavaScriptService(TypeScriptService):
    name = "javascript"
    description = "JavaScript (and Vue single-file component) import/require statements"
    extensions = (".js", ".jsx", ".cjs", ".mjs", ".vue")
