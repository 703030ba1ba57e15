"""Registry interfaces consumed by the scanner and the trigger policy."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Protocol

from hookdispatch.domain.models import (
    GlobalAutoTrigger,
    JobCandidate,
    TriggerConfig,
    TriggerKind,
)
from hookdispatch.security.privilege import Identity, current_identity


class GlobalConfigProvider(Protocol):
    """Server-wide settings the trigger policy depends on."""

    def is_auto_trigger_enabled_for_all_jobs(self) -> bool: ...

    def is_commit_status_enabled(self) -> bool: ...


class JobRegistryView(ABC):
    """Read access to the jobs known to the build server.

    Implementations return point-in-time views; jobs may change between two
    calls and no snapshot isolation is promised across a whole iteration.
    """

    @abstractmethod
    def _load_jobs(self) -> List[JobCandidate]:
        """Return every job regardless of visibility.

        Raises:
            RegistryUnavailableError: If the registry cannot be read
        """
        pass

    def all_jobs(self, identity: Optional[Identity] = None) -> Iterable[JobCandidate]:
        """Jobs visible to ``identity`` (defaults to the current identity).

        Elevated identities see every job; others only see jobs that list
        them as readers.
        """
        viewer = identity or current_identity()
        for job in self._load_jobs():
            if viewer.is_system or viewer.name in job.readers:
                yield job


class TriggerRegistry:
    """Looks up the trigger of a given kind for a job.

    The global auto trigger is not stored on jobs; it exists for every job
    while the global setting is on.
    """

    def __init__(self, global_config: GlobalConfigProvider):
        self.global_config = global_config

    def find(self, job: JobCandidate, kind: TriggerKind) -> Optional[TriggerConfig]:
        """Return the job's trigger of ``kind``, or None if it has none."""
        kind = TriggerKind(kind)
        if kind == TriggerKind.GLOBAL_AUTO:
            if self.global_config.is_auto_trigger_enabled_for_all_jobs():
                return GlobalAutoTrigger()
            return None

        for trigger in job.triggers:
            if trigger.kind == kind.value:
                return trigger
        return None
