"""Factory function for instantiating build queue clients."""

import logging
from typing import Optional

from hookdispatch.config.environment import EnvironmentConfig
from hookdispatch.config.models import BuildQueueConfig, QueueBackend

from .base import BuildQueueClient
from .database import DatabaseBuildQueue
from .exceptions import BuildQueueConfigurationError
from .http import HttpBuildQueue

logger = logging.getLogger(__name__)


def get_build_queue(
    queue_config: BuildQueueConfig, env_config: Optional[EnvironmentConfig] = None
) -> BuildQueueClient:
    """Instantiate the build queue client selected by configuration.

    BUILD_QUEUE_URL and BUILD_QUEUE_TOKEN from the environment take
    precedence over the config file for the http backend. The database
    backend expects init_database() to have been called.

    Raises:
        BuildQueueConfigurationError: If the backend is unknown or the http
            backend has no URL
    """
    backend = QueueBackend(queue_config.backend)

    logger.debug("Creating build queue client", extra={"backend": backend.value})

    if backend == QueueBackend.DATABASE:
        return DatabaseBuildQueue()

    if backend == QueueBackend.HTTP:
        url = (env_config.build_queue_url if env_config else None) or queue_config.url
        token = env_config.build_queue_token if env_config else None
        if not url:
            raise BuildQueueConfigurationError(
                "build_queue.url (or BUILD_QUEUE_URL) is required for the http backend"
            )
        return HttpBuildQueue(
            base_url=url,
            token=token,
            timeout=queue_config.timeout,
            user_agent=queue_config.user_agent,
        )

    supported = ", ".join(b.value for b in QueueBackend)
    raise BuildQueueConfigurationError(
        f"Unknown build queue backend: {backend}. Supported backends: {supported}"
    )
