from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from settings import BrowseSettings


def load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must be a mapping: {path}")
    return data


def load_settings(config_path: Path | None = None) -> BrowseSettings:
    """Build settings from the environment, overridden by an optional YAML file."""
    if config_path is None:
        return BrowseSettings()
    return BrowseSettings(**load_yaml(config_path))


@lru_cache(maxsize=1)
def get_settings() -> BrowseSettings:
    return load_settings()
