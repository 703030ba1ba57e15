"""Configuration management for the push hook dispatcher."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    BuildQueueConfig,
    GlobalSettings,
    JobConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    QueueBackend,
)

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "GlobalSettings",
    "JobConfig",
    "BuildQueueConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "QueueBackend",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
