"""Custom exceptions for build queue clients."""


class BuildQueueError(Exception):
    """Base exception for all build queue errors.

    A failure to schedule a build or poll is not caught by the dispatcher;
    it propagates to the caller of the dispatch.
    """

    pass


class BuildQueueHTTPError(BuildQueueError):
    """Remote build server answered with 4xx or 5xx, or the connection failed."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 when no response was received)
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class BuildQueueTimeoutError(BuildQueueError):
    """Request to the remote build server timed out."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class BuildQueueConfigurationError(BuildQueueError):
    """Invalid build queue configuration (unknown backend, missing URL)."""

    pass
