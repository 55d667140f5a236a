"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from source_dependency.web.api import router


def create_app() -> FastAPI:
    app = FastAPI(title="source-dependency", version="0.3.0")
    app.include_router(router)
    return app


app = create_app()
