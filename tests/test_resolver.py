"""Tests for path resolution."""

from source_dependency.analysis.graph_models import EXTERNAL_PREFIX
from source_dependency.analysis.resolver import PathResolver, cancel_dot, join_path, resolve_path

TS_SUFFIXES = [".ts", "/index.ts"]


def test_cancel_dot():
    assert cancel_dot("a/b/c/../../e/./f") == "a/e/f"
    assert cancel_dot("./foo") == "foo"
    assert cancel_dot("../../x") == "x"


def test_join_path():
    assert join_path("", "a.ts") == "a.ts"
    assert join_path("src", "a.ts") == "src/a.ts"


def test_resolve_with_suffixes():
    files = ["src/foo.ts", "src/bar/index.ts"]
    assert resolve_path("./foo", "src", files, TS_SUFFIXES) == "src/foo.ts"
    assert resolve_path("./bar", "src", files, TS_SUFFIXES) == "src/bar/index.ts"


def test_resolve_parent_directory():
    files = ["src/foo.ts", "src/bar/index.ts"]
    assert resolve_path("../foo", "src/bar", files, TS_SUFFIXES) == "src/foo.ts"
    # ".." is cancelled after joining, so strict matching also climbs
    assert resolve_path("../foo", "src/bar", files, TS_SUFFIXES, strict=True) == "src/foo.ts"


def test_resolve_rooted_reference():
    files = ["lib/util.ts", "src/lib/util.ts"]
    assert resolve_path("/lib/util", "src", files, TS_SUFFIXES, strict=True) == "lib/util.ts"


def test_resolve_unknown_returns_none():
    assert resolve_path("lodash", "src", ["src/foo.ts"], TS_SUFFIXES) is None


def test_loose_suffix_match():
    files = ["vendor/pkg/util.h"]
    assert resolve_path("pkg/util.h", "src", files) == "vendor/pkg/util.h"
    assert resolve_path("pkg/util.h", "src", files, strict=True) is None


def test_first_candidate_wins():
    files = ["src/foo/index.ts", "src/foo.ts"]
    assert resolve_path("./foo", "src", files, TS_SUFFIXES) == "src/foo.ts"


def test_first_file_wins_on_ambiguous_suffix():
    files = ["a/util.h", "b/util.h"]
    assert resolve_path("util.h", "src", files) == "a/util.h"


class TestPathResolver:
    def test_unresolved_is_tagged_external(self):
        resolver = PathResolver(["src/foo.ts"], TS_SUFFIXES)
        assert resolver.resolve("react", "src") == EXTERNAL_PREFIX + "react"

    def test_resolves_known_file(self):
        resolver = PathResolver(["src/foo.ts"], TS_SUFFIXES)
        assert resolver.resolve("./foo", "src") == "src/foo.ts"

    def test_name_resolver_fallback(self):
        def remap(name):
            if name.startswith("@app/"):
                return "/src/" + name[len("@app/"):]
            return None

        resolver = PathResolver(["src/foo.ts"], TS_SUFFIXES, strict=True, name_resolver=remap)
        assert resolver.resolve("@app/foo", "src/deep") == "src/foo.ts"
        assert resolver.resolve("@other/foo", "src/deep") == EXTERNAL_PREFIX + "@other/foo"
