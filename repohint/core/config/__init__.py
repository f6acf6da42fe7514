"""
Configuration package - unified access point.

This package provides all configuration classes and the loader for a
configuration directory.
"""

from repohint.core.config.settings import CONFIG_FILE_NAME, Config, load_config

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "load_config",
]
