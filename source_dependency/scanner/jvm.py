"""Java and C# scanners: both report module (type / namespace) names."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from source_dependency.models import ParseContext, ParseResult
from source_dependency.scanner.base import BaseLanguageService

_PACKAGE_RE = re.compile(r"^\s*package\s+([\w.]+)\s*;")
_JAVA_IMPORT_RE = re.compile(r"^\s*import\s+(?:static\s+)?([\w.*]+)\s*;")
_NAMESPACE_RE = re.compile(r"^\s*namespace\s+([\w.]+)")
_USING_RE = re.compile(r"^\s*using\s+(?:static\s+)?([A-Za-z_][\w.]*)\s*;")


class JavaService(BaseLanguageService):
    name = "java"
    description = "Java package/import statements; modules are fully qualified class names"
    extensions = (".java",)
    module_separator = "."

    def parse(self, context: ParseContext) -> ParseResult:
        class_name = PurePosixPath(context.file).stem
        module = class_name
        deps: list[str] = []
        for line in context.lines():
            m = _PACKAGE_RE.match(line)
            if m:
                module = f"{m.group(1)}.{class_name}"
                continue
            m = _JAVA_IMPORT_RE.match(line)
            if m:
                deps.append(m.group(1))
        return ParseResult(module=module, module_dependencies={module: deps})


class CSharpService(BaseLanguageService):
    name = "csharp"
    description = "C# namespace/using statements; modules are namespaces"
    extensions = (".cs",)
    module_separator = "."

    def parse(self, context: ParseContext) -> ParseResult:
        namespace = None
        usings: list[str] = []
        for line in context.lines():
            m = _NAMESPACE_RE.match(line)
            if m:
                namespace = m.group(1)
                continue
            m = _USING_RE.match(line)
            if m:
                usings.append(m.group(1))
        # no namespace: the file path stands in for the module
        module = namespace or context.file
        return ParseResult(module=module, module_dependencies={module: usings})
