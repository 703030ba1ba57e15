"""Build queue clients: where scheduled builds and poll requests go."""

from .base import BuildQueueClient
from .database import DatabaseBuildQueue
from .exceptions import (
    BuildQueueConfigurationError,
    BuildQueueError,
    BuildQueueHTTPError,
    BuildQueueTimeoutError,
)
from .factory import get_build_queue
from .http import HttpBuildQueue

__all__ = [
    "BuildQueueClient",
    "DatabaseBuildQueue",
    "HttpBuildQueue",
    "get_build_queue",
    "BuildQueueError",
    "BuildQueueHTTPError",
    "BuildQueueTimeoutError",
    "BuildQueueConfigurationError",
]
