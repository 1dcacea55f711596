"""
Configuration package for locale-updater.

Provides the settings schema and the loader for the optional YAML file.
"""

from .manager import ConfigManager
from .schema import LocaleUpdaterConfig, LoggingConfig, PipelineConfig, ToolsConfig

__all__ = [
    "ConfigManager",
    "LocaleUpdaterConfig",
    "LoggingConfig",
    "PipelineConfig",
    "ToolsConfig",
]
