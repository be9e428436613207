"""YAML config loader and dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml

from tenki.config.defaults import DEFAULT_REGIONS
from tenki.config.schema import AppConfig, RegionConfig


def load_config(path: str | Path | None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. If no regions are specified in the
    YAML, injects DEFAULT_REGIONS.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config root must be a mapping: {path}")

    if "regions" not in raw or not raw["regions"]:
        raw["regions"] = [r.model_dump() for r in DEFAULT_REGIONS]

    return AppConfig(**raw)


def region_by_slug(config: AppConfig, slug: str | None = None) -> RegionConfig:
    """Resolve a region by slug, defaulting to config.region."""
    slug = slug or config.region
    for region in config.regions:
        if region.slug == slug:
            return region
    raise KeyError(f"Unknown region: {slug}")


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'render.placeholder'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
