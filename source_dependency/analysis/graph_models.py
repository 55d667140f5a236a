"""Data models for the dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pydantic import BaseModel, Field

EXTERNAL_PREFIX = "*external*/"
EXTERNAL_MODULE_PREFIX = "*external-module*/"

Dependencies = dict[str, list[str]]
Edge = tuple[str, str]


def is_external(name: str) -> bool:
    return name.startswith(EXTERNAL_PREFIX) or name.startswith(EXTERNAL_MODULE_PREFIX)


class DependencyInfo(BaseModel):
    """Raw aggregation result; also the on-disk cache format."""
    path_to_module: dict[str, str] = Field(default_factory=dict)
    module_to_path: dict[str, str] = Field(default_factory=dict)
    path_dependencies: Dependencies = Field(default_factory=dict)
    module_dependencies: Dependencies = Field(default_factory=dict)
    module_separator: str = "/"


@dataclass(frozen=True)
class Leaf:
    """A containment node with no children."""


@dataclass
class Interior:
    """A containment node keyed by progressively longer name prefixes."""
    children: dict[str, Node] = field(default_factory=dict)


Node = Union[Leaf, Interior]


def to_plain(tree: Interior) -> dict:
    """Nested-dict form of a containment tree; leaves become ``None``."""
    return {
        key: None if isinstance(child, Leaf) else to_plain(child)
        for key, child in tree.children.items()
    }


@dataclass
class DependencyData:
    """Everything a renderer consumes."""
    raw_info: DependencyInfo = field(default_factory=DependencyInfo)
    dependencies: Dependencies = field(default_factory=dict)
    flat_dependencies: list[Edge] = field(default_factory=list)
    contains: Interior = field(default_factory=Interior)
    flat_contains: list[Edge] = field(default_factory=list)
    separator: str = "/"

    def to_dict(self) -> dict:
        return {
            "dependencies": self.dependencies,
            "flatDependencies": [list(e) for e in self.flat_dependencies],
            "contains": to_plain(self.contains),
            "flatContains": [list(e) for e in self.flat_contains],
        }
