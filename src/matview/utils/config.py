"""Dotted-path access to configuration mappings."""
from __future__ import annotations

from typing import Any, Dict, Mapping


def get(cfg: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Return ``cfg["a"]["b"]`` for ``path == "a.b"``, or *default* if missing."""
    cur: Any = cfg
    for part in path.split('.'):
        if not isinstance(cur, Mapping) or part not in cur:
            return default
        cur = cur[part]
    return cur


def flatten(cfg: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Map dotted paths to leaf values, e.g. ``{"modes.eps": 0.0, ...}``."""
    out: Dict[str, Any] = {}
    for k, v in cfg.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, Mapping):
            out.update(flatten(v, key))
        else:
            out[key] = v
    return out
