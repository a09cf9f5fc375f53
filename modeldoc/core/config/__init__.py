"""Configuration loading and management for modeldoc."""

from modeldoc.core.config.loader import (
    ConfigLoader,
    clear_config_cache,
    get_default_config,
    load_config,
)
from modeldoc.core.config.models import LoggingConfig, ModelDocConfig

__all__ = [
    "ConfigLoader",
    "LoggingConfig",
    "ModelDocConfig",
    "clear_config_cache",
    "get_default_config",
    "load_config",
]
