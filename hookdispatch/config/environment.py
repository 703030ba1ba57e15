"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_DATABASE_URL = "sqlite:///./data/hookdispatch.db"


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        database_url: Optional[str] = None,
        build_queue_url: Optional[str] = None,
        build_queue_token: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.log_level = log_level
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.build_queue_url = build_queue_url
        self.build_queue_token = build_queue_token
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - DATABASE_URL: Database for recorded build requests
      (default: sqlite:///./data/hookdispatch.db)
    - BUILD_QUEUE_URL: Base URL of the remote build server (overrides config)
    - BUILD_QUEUE_TOKEN: Bearer token sent to the remote build server
    - ENVIRONMENT: Environment label attached to log records

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If any variable is invalid
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    database_url = os.getenv("DATABASE_URL")
    build_queue_url = os.getenv("BUILD_QUEUE_URL")
    build_queue_token = os.getenv("BUILD_QUEUE_TOKEN")
    environment = os.getenv("ENVIRONMENT")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if database_url and "://" not in database_url:
        errors.append(
            f"Invalid DATABASE_URL: '{database_url}'. Expected a URL like sqlite:///./data/hookdispatch.db"
        )

    if build_queue_url and not build_queue_url.startswith(("http://", "https://")):
        errors.append(
            f"Invalid BUILD_QUEUE_URL: '{build_queue_url}'. Must start with http:// or https://"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level.upper() if log_level else None,
        database_url=database_url,
        build_queue_url=build_queue_url.rstrip("/") if build_queue_url else None,
        build_queue_token=build_queue_token,
        environment=environment,
    )
