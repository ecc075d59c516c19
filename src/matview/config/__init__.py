"""Configuration loading utilities."""
from .loader import DEFAULT_PATH, dump_config, load_config
from .schema import HistogramConfig, LoggingConfig, MatviewConfig, ModesConfig

__all__ = [
    "DEFAULT_PATH",
    "load_config",
    "dump_config",
    "MatviewConfig",
    "ModesConfig",
    "HistogramConfig",
    "LoggingConfig",
]
