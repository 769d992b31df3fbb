"""Configuration management module for Anken Matcher."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, read_yaml_file
from .models import (
    AdvancedConfig,
    AppConfig,
    CacheSettings,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SourceSettings,
)

__all__ = [
    "load_config",
    "read_yaml_file",
    "load_environment_config",
    "AppConfig",
    "SourceSettings",
    "CacheSettings",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    "LogLevel",
    "LogFormat",
    "ConfigurationError",
]
