"""Job and trigger registries.

Public API:
    - JobRegistryView: abstract read access to jobs, filtered by identity
    - InMemoryJobRegistry / FileJobRegistry: concrete registries
    - TriggerRegistry: per-job trigger lookup
    - GlobalConfigProvider: protocol for server-wide trigger settings
    - RegistryError / RegistryUnavailableError
"""

from .base import GlobalConfigProvider, JobRegistryView, TriggerRegistry
from .exceptions import RegistryError, RegistryUnavailableError
from .sources import FileJobRegistry, InMemoryJobRegistry

__all__ = [
    "JobRegistryView",
    "InMemoryJobRegistry",
    "FileJobRegistry",
    "TriggerRegistry",
    "GlobalConfigProvider",
    "RegistryError",
    "RegistryUnavailableError",
]
