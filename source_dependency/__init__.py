"""source-dependency: extract, normalize and render source dependency graphs."""

__version__ = "0.3.0"
