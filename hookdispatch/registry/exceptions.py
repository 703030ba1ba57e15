"""Job registry exceptions."""


class RegistryError(Exception):
    """Base exception for job registry errors."""

    pass


class RegistryUnavailableError(RegistryError):
    """The job registry cannot be read right now.

    Examples:
    - Registry file missing or unreadable
    - Registry content fails validation
    - Host runtime not ready yet
    """

    pass
