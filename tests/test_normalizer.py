"""Tests for the graph normalization stages."""

import pytest

from source_dependency.analysis.filters import parse_filters
from source_dependency.analysis.graph_models import (
    EXTERNAL_PREFIX,
    DependencyInfo,
)
from source_dependency.analysis.normalizer import (
    NormalizeOptions,
    build_dependency_data,
    collapse_depth,
    filter_entities,
    flatten_dependencies,
    mark_external,
    restrict_to_roots,
    strip_by_depth,
    strip_prefix,
)
from source_dependency.models import ConfigError


# ── Filters ───────────────────────────────────────────────────

class TestTextFilters:
    def test_include_and_exclude(self):
        filters = parse_filters(["src/", "-test"])
        assert filters.matches("src/a.ts")
        assert not filters.matches("lib/a.ts")
        assert not filters.matches("src/a.test.ts")

    def test_plus_prefix_includes(self):
        filters = parse_filters(["+^lib"])
        assert filters.matches("lib/x")
        assert not filters.matches("src/lib/x")

    def test_empty_matches_everything(self):
        filters = parse_filters([])
        assert not filters
        assert filters.matches("anything")

    def test_invalid_regex(self):
        with pytest.raises(ConfigError):
            parse_filters(["("])


# ── Stages ────────────────────────────────────────────────────

def test_mark_external_tags_unknown_targets():
    deps = {"a": ["b", "react"], "b": [EXTERNAL_PREFIX + "lodash"]}
    assert mark_external(deps, exclude=False) == {
        "a": ["b", EXTERNAL_PREFIX + "react"],
        "b": [EXTERNAL_PREFIX + "lodash"],
    }


def test_mark_external_excludes_unknown_targets():
    deps = {"a": ["b", "react"], "b": [EXTERNAL_PREFIX + "lodash"]}
    assert mark_external(deps, exclude=True) == {"a": ["b"], "b": []}


def test_filter_entities_drops_keys_and_targets():
    deps = {"src/a": ["src/b", "test/t"], "test/t": ["src/a"]}
    result = filter_entities(deps, parse_filters(["-^test/"]))
    assert result == {"src/a": ["src/b"]}


def test_restrict_to_roots():
    deps = {"a": ["b"], "b": ["c"], "c": [], "x": ["y"], "y": []}
    result = restrict_to_roots(deps, parse_filters(["^a$"]))
    assert set(result) == {"a", "b", "c"}


def test_restrict_without_filters_keeps_everything():
    deps = {"a": ["b"], "x": []}
    assert restrict_to_roots(deps, parse_filters([])) == deps


def test_flatten_dedups_and_drops_self_edges():
    deps = {"a": ["b", "b", "a"], "b": ["a"]}
    assert flatten_dependencies(deps) == [("a", "b"), ("b", "a")]


def test_strip_prefix():
    edges = [("com/acme/a", "com/acme/b"), ("com/acme/a", "lib/c")]
    assert strip_prefix(edges, "com/acme/") == [("a", "b"), ("a", "lib/c")]


def test_strip_by_depth():
    assert strip_by_depth("a/b/c", 2, "/") == "a/b"
    assert strip_by_depth("a/b/c", 0, "/") == "a/b/c"
    assert strip_by_depth("a", 3, "/") == "a"


class TestCollapseDepth:
    edges = [
        ("app/core/a.ts", "app/core/b.ts"),
        ("app/core/a.ts", "app/ui/c.ts"),
        ("app/ui/c.ts", "app/core/b.ts"),
        ("app/ui/c.ts", "*external*/react/dom"),
    ]
    internal = {"app/core/a.ts", "app/core/b.ts", "app/ui/c.ts"}

    def test_collapse(self):
        result = collapse_depth(self.edges, 2, 2, "/", self.internal)
        assert result == [
            ("app/core", "app/ui"),
            ("app/ui", "app/core"),
            ("app/ui", "*external*/react"),
        ]

    def test_separate_external_depth(self):
        result = collapse_depth(self.edges, 2, 1, "/", self.internal)
        assert ("app/ui", "*external*") in result

    def test_idempotent(self):
        once = collapse_depth(self.edges, 2, 1, "/", self.internal)
        twice = collapse_depth(once, 2, 1, "/", self.internal)
        assert once == twice


# ── Full normalization ────────────────────────────────────────

class TestBuildDependencyData:
    def _info(self):
        return DependencyInfo(
            path_dependencies={
                "src/a.ts": ["src/b.ts", EXTERNAL_PREFIX + "react"],
                "src/b.ts": [],
            },
        )

    def test_defaults(self):
        data = build_dependency_data(self._info())
        assert data.flat_dependencies == [
            ("src/a.ts", "src/b.ts"),
            ("src/a.ts", EXTERNAL_PREFIX + "react"),
        ]
        assert data.separator == "/"

    def test_exclude_external(self):
        data = build_dependency_data(self._info(), NormalizeOptions(exclude_external=True))
        assert data.flat_dependencies == [("src/a.ts", "src/b.ts")]
        assert "*external*" not in data.contains.children

    def test_prefix_and_containment(self):
        options = NormalizeOptions(exclude_external=True, prefix="src/")
        data = build_dependency_data(self._info(), options)
        assert data.flat_dependencies == [("a.ts", "b.ts")]
        assert data.flat_contains == []

    def test_module_map_preferred(self):
        info = self._info()
        info.module_dependencies = {"pkg.a": ["pkg.b"], "pkg.b": []}
        info.module_separator = "."
        data = build_dependency_data(info)
        assert data.flat_dependencies == [("pkg.a", "pkg.b")]
        assert data.separator == "."

        forced = build_dependency_data(info, NormalizeOptions(force_path_dependency=True))
        assert forced.flat_dependencies[0] == ("src/a.ts", "src/b.ts")

    def test_every_node_has_ancestors(self):
        info = DependencyInfo(path_dependencies={"x/y/a.ts": ["x/z/b.ts"], "x/z/b.ts": []})
        data = build_dependency_data(info)
        x = data.contains.children["x"]
        assert set(x.children) == {"x/y", "x/z"}
        assert "x/y/a.ts" in x.children["x/y"].children
