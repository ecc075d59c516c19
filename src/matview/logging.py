from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from matview.utils.config import get

HANDLER_NAME = "matview"

_LEVEL_MAP = {
    "none": logging.WARNING,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _normalize(level: Optional[str]) -> int:
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().lower(), logging.WARNING)


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "time": self.formatTime(record, "%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            base.update(extra)
        return json.dumps(base, ensure_ascii=False)


def _formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"
    )


def init_logging(level: int | str | None = None, fmt: str = "text") -> None:
    """Set up the root and ``matview`` loggers.

    Repeated calls update the level and the formatter but never add a second
    handler.
    """
    lvl = _normalize(level) if isinstance(level, str) or level is None else int(level)

    root = logging.getLogger()
    h = next((h for h in root.handlers if h.get_name() == HANDLER_NAME), None)
    if h is None:
        h = logging.StreamHandler()
        h.set_name(HANDLER_NAME)
        root.addHandler(h)
    h.setFormatter(_formatter(fmt))
    root.setLevel(lvl)

    logging.getLogger("matview").setLevel(lvl)


def init_logging_from_cfg(cfg: Optional[Mapping[str, Any]]) -> None:
    cfg = cfg or {}
    init_logging(get(cfg, "logging.level"), get(cfg, "logging.format") or "text")
