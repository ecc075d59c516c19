"""Configuration loader."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from matview.utils.dict_merge import deep_update
from .schema import MatviewConfig

__all__ = ["load_config", "dump_config", "DEFAULT_PATH"]

DEFAULT_PATH = "configs/matview.yaml"
_SECTIONS = {"modes", "histogram", "logging"}


def _read_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise TypeError(f"Top-level YAML at {path} must be a mapping")
        return data


def _ensure_sections(d: Mapping[str, Any]) -> None:
    extra = set(d.keys()) - _SECTIONS
    if extra:
        raise ValueError(f"unexpected top-level keys: {sorted(extra)}")


def _env_overrides() -> Dict[str, Any]:
    lg: Dict[str, Any] = {}
    if os.getenv("MATVIEW_LOG_LEVEL"):
        lg["level"] = os.environ["MATVIEW_LOG_LEVEL"]
    if os.getenv("MATVIEW_LOG_FORMAT"):
        lg["format"] = os.environ["MATVIEW_LOG_FORMAT"]
    return {"logging": lg} if lg else {}


def load_config(
    path: str | Path | None = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Load, merge and validate the configuration.

    Precedence, lowest first: model defaults, the YAML file at *path* (a
    missing file is ignored), *overrides*, then the ``MATVIEW_LOG_LEVEL`` /
    ``MATVIEW_LOG_FORMAT`` environment variables.
    """
    data = _read_yaml(path or DEFAULT_PATH)
    _ensure_sections(data)

    cfg: Dict[str, Any] = deep_update({}, data)
    if overrides:
        _ensure_sections(overrides)
        cfg = deep_update(cfg, overrides)
    cfg = deep_update(cfg, _env_overrides())

    model = MatviewConfig.model_validate(cfg)
    return model.model_dump()


def dump_config(cfg: Mapping[str, Any], path: str | Path) -> Path:
    """Write a validated copy of *cfg* as YAML and return the path."""
    model = MatviewConfig.model_validate(dict(cfg))
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        yaml.safe_dump(model.model_dump(), f, sort_keys=False)
    return p
