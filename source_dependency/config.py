"""Config-file loading and option parsing."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from source_dependency.models import ConfigError, GraphConfig, NameResolver

logger = logging.getLogger(__name__)


class ConfigFile(BaseModel):
    """Keys accepted in a JSON config file (snake_case or camelCase)."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    target: str | None = None
    language: str | None = None
    input_filters: list[str] | None = None
    input_path_mapping: list[str] | None = None
    exclude_well_known_folders: bool | None = None
    exclude_external: bool | None = None
    result_filters: list[str] | None = None
    root_filters: list[str] | None = None
    prefix: str | None = None
    depth: str | int | None = None
    force_path_dependency: bool | None = None
    strict_matching: bool | None = None
    language_options: dict[str, Any] | None = None
    output_format: str | None = None
    output_file: str | None = None
    cache_file: str | None = None
    debug: bool | None = None


def load_config_file(path: Path) -> dict[str, Any]:
    """Values set in ``path``; keys left out of the file are omitted."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    try:
        parsed = ConfigFile.model_validate_json(text)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e
    values = parsed.model_dump(exclude_none=True)
    for key in ("target", "output_file", "cache_file"):
        if key in values:
            values[key] = Path(values[key])
    if "depth" in values:
        values["depth"] = str(values["depth"])
    logger.debug("config file %s: %s", path, values)
    return values


def build_config(
    file_values: dict[str, Any] | None = None,
    **overrides: Any,
) -> GraphConfig:
    """Defaults < config file < explicit overrides (``None`` means "not given")."""
    values: dict[str, Any] = dict(file_values or {})
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, dict)) and not value:
            continue
        values[key] = list(value) if isinstance(value, tuple) else value
    try:
        return GraphConfig(**values)
    except TypeError as e:
        raise ConfigError(str(e)) from e


def parse_depth(spec: str) -> tuple[int, int]:
    """``"2"`` -> (2, 0); ``"2,1"`` -> (2, 1); empty -> (0, 0)."""
    if not spec:
        return 0, 0
    parts = [p.strip() for p in str(spec).split(",")]
    try:
        depths = [int(p) for p in parts]
    except ValueError:
        raise ConfigError(f"invalid depth {spec!r}: expected N or N,M") from None
    if len(depths) > 2 or any(d < 0 for d in depths):
        raise ConfigError(f"invalid depth {spec!r}: expected N or N,M")
    return depths[0], depths[1] if len(depths) > 1 else 0


def parse_path_mapping(mappings: Iterable[str]) -> NameResolver:
    """``["a=b"]`` -> a function replacing a leading ``a`` with ``b``."""
    rules: list[tuple[str, str]] = []
    for m in mappings:
        if "=" not in m:
            raise ConfigError(f"invalid path mapping {m!r}: expected FROM=TO")
        src, _, dst = m.partition("=")
        rules.append((src, dst))

    def resolve(name: str) -> str | None:
        for src, dst in rules:
            if name.startswith(src):
                return dst + name[len(src):]
        return None

    return resolve


def _coerce(value: str) -> Any:
    lowered = value.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    try:
        return json.loads(value)
    except ValueError:
        return value


def parse_options(options: Iterable[str]) -> dict[str, Any]:
    """``["lock_file=true", "x=3"]`` -> ``{"lock_file": True, "x": 3}``."""
    result: dict[str, Any] = {}
    for opt in options:
        key, sep, value = opt.partition("=")
        if not key:
            raise ConfigError(f"invalid option {opt!r}: expected KEY=VALUE")
        result[key] = _coerce(value) if sep else True
    return result
