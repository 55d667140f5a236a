"""FastAPI routes exposing the graph pipeline."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from source_dependency.analysis.graph_models import DependencyData
from source_dependency.exporter import generate_output, get_all_generators
from source_dependency.models import GraphConfig
from source_dependency.pipeline import run_check, run_pipeline
from source_dependency.scanner import get_language_summary

router = APIRouter(prefix="/api")


# --- Request models ---

class GraphRequest(BaseModel):
    path: str
    language: str = "typescript"
    input_filters: list[str] = Field(default_factory=list)
    input_path_mapping: list[str] = Field(default_factory=list)
    exclude_external: bool = False
    result_filters: list[str] = Field(default_factory=list)
    root_filters: list[str] = Field(default_factory=list)
    prefix: str = ""
    depth: str = ""
    force_path_dependency: bool = False
    language_options: dict = Field(default_factory=dict)

class RenderRequest(GraphRequest):
    format: str = "plain"


def _validate_path(p: str) -> Path:
    resolved = Path(p).expanduser().resolve()
    if not resolved.exists():
        raise HTTPException(404, f"Path not found: {resolved}")
    return resolved


def _build(req: GraphRequest) -> DependencyData:
    config = GraphConfig(
        target=_validate_path(req.path),
        language=req.language,
        input_filters=req.input_filters,
        input_path_mapping=req.input_path_mapping,
        exclude_external=req.exclude_external,
        result_filters=req.result_filters,
        root_filters=req.root_filters,
        prefix=req.prefix,
        depth=req.depth,
        force_path_dependency=req.force_path_dependency,
        language_options=req.language_options,
    )
    try:
        return run_pipeline(config)
    except ValueError as e:
        raise HTTPException(400, str(e))


# --- Endpoints ---

@router.post("/graph")
async def build_graph(req: GraphRequest):
    data = await asyncio.to_thread(_build, req)
    return data.to_dict()


@router.post("/render")
async def render(req: RenderRequest):
    data = await asyncio.to_thread(_build, req)
    try:
        output = generate_output(req.format, data)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"format": req.format, "output": output}


@router.post("/cycles")
async def cycles(req: GraphRequest):
    data = await asyncio.to_thread(_build, req)
    return {"cycles": run_check(data)}


@router.get("/languages")
async def languages():
    return {"languages": [{"name": n, "description": d} for n, d in get_language_summary()]}


@router.get("/formats")
async def formats():
    return {"formats": [{"name": n, "description": d} for n, d in get_all_generators()]}
