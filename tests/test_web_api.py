"""Tests for the web API."""

import pytest
from pathlib import Path

# Only run if fastapi/httpx are installed
try:
    from fastapi.testclient import TestClient
    from source_dependency.web import create_app
    HAS_WEB = True
except ImportError:
    HAS_WEB = False

pytestmark = pytest.mark.skipif(not HAS_WEB, reason="web dependencies not installed")

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


def test_graph(client):
    res = client.post("/api/graph", json={
        "path": str(FIXTURES / "java_project"),
        "language": "java",
        "exclude_external": True,
    })
    assert res.status_code == 200
    data = res.json()
    assert data["flatDependencies"] == [["com.acme.widgets.Button", "com.acme.core.Base"]]
    assert "com" in data["contains"]


def test_graph_nonexistent_path(client):
    res = client.post("/api/graph", json={"path": "/nonexistent/path"})
    assert res.status_code == 404


def test_graph_invalid_depth(client):
    res = client.post("/api/graph", json={"path": str(FIXTURES / "ts_project"), "depth": "x"})
    assert res.status_code == 400
    assert "invalid depth" in res.json()["detail"]


def test_unknown_language(client):
    res = client.post("/api/graph", json={"path": str(FIXTURES / "ts_project"), "language": "cobol"})
    assert res.status_code == 400


def test_render(client):
    res = client.post("/api/render", json={
        "path": str(FIXTURES / "ts_project"),
        "exclude_external": True,
        "format": "dot",
    })
    assert res.status_code == 200
    data = res.json()
    assert data["format"] == "dot"
    assert data["output"].startswith("digraph {")


def test_render_unknown_format(client):
    res = client.post("/api/render", json={"path": str(FIXTURES / "ts_project"), "format": "svg"})
    assert res.status_code == 400


def test_cycles(client):
    res = client.post("/api/cycles", json={"path": str(FIXTURES / "ts_project")})
    assert res.status_code == 200
    assert res.json()["cycles"] == [["src/bar/index.ts", "src/foo.ts", "src/bar/index.ts"]]


def test_npm_options(client):
    res = client.post("/api/graph", json={
        "path": str(FIXTURES / "npm_project"),
        "language": "npm",
        "language_options": {"dev": True},
    })
    assert res.status_code == 200
    assert ["web", "*external*/jest"] in res.json()["flatDependencies"]


def test_languages(client):
    res = client.get("/api/languages")
    assert res.status_code == 200
    names = [lang["name"] for lang in res.json()["languages"]]
    assert "typescript" in names
    assert "npm" in names


def test_formats(client):
    res = client.get("/api/formats")
    assert res.status_code == 200
    names = [f["name"] for f in res.json()["formats"]]
    assert names == ["plain", "dot", "dgml", "js", "json", "vis", "raw"]
