"""Language service registry and dispatcher."""

from __future__ import annotations

from source_dependency.models import UnsupportedLanguageError
from source_dependency.scanner.base import BaseLanguageService
from source_dependency.scanner.clike import CppService, CService
from source_dependency.scanner.jvm import CSharpService, JavaService
from source_dependency.scanner.npm import NpmService
from source_dependency.scanner.python_lang import PythonService
from source_dependency.scanner.raw import RawService
from source_dependency.scanner.typescript import JavaScriptService, TypeScriptService

_REGISTRY: dict[str, type[BaseLanguageService]] = {
    cls.name: cls
    for cls in (
        TypeScriptService,
        JavaScriptService,
        JavaService,
        CService,
        CppService,
        PythonService,
        CSharpService,
        NpmService,
        RawService,
    )
}


def get_language_service(name: str) -> BaseLanguageService:
    try:
        return _REGISTRY[name]()
    except KeyError:
        raise UnsupportedLanguageError(
            f"unsupported language: {name} (supported: {', '.join(_REGISTRY)})"
        ) from None


def get_supported_languages() -> list[str]:
    return list(_REGISTRY)


def get_language_summary() -> list[tuple[str, str]]:
    return [(name, cls.description) for name, cls in _REGISTRY.items()]


__all__ = [
    "BaseLanguageService",
    "CService",
    "CSharpService",
    "CppService",
    "JavaScriptService",
    "JavaService",
    "NpmService",
    "PythonService",
    "RawService",
    "TypeScriptService",
    "get_language_service",
    "get_language_summary",
    "get_supported_languages",
]
