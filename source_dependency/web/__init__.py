"""HTTP API for the dependency graph pipeline."""

from source_dependency.web.app import create_app

__all__ = ["create_app"]
