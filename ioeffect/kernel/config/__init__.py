"""Configuration for ioeffect."""

from ioeffect.kernel.config.loader import ConfigLoader, clear_config_cache, load_config
from ioeffect.kernel.config.models import IoEffectConfig, LoggingConfig

__all__ = [
    "ConfigLoader",
    "IoEffectConfig",
    "LoggingConfig",
    "clear_config_cache",
    "load_config",
]
