"""Data models produced by the job scanner."""

from dataclasses import dataclass, field
from typing import List, Optional

from hookdispatch.domain.models import JobCandidate


@dataclass
class ScanStats:
    """
    Counters accumulated while scanning the registry for one event.

    Attributes:
        jobs_seen: Jobs visible to the scanning identity
        scm_capable_jobs: Jobs with at least one Git source
        matched_repository_count: Git remotes (across all jobs) matching the event URI
    """

    jobs_seen: int = 0
    scm_capable_jobs: int = 0
    matched_repository_count: int = 0

    @property
    def scm_capable_jobs_found(self) -> bool:
        return self.scm_capable_jobs > 0


@dataclass(frozen=True)
class MatchedRemote:
    """A job remote whose URL matched the event's repository URI."""

    remote_name: str
    url: str
    ignore_notify_commit: bool = False


@dataclass
class ScanEntry:
    """A job with at least one remote matching the event, in configuration order."""

    job: JobCandidate
    matched_remotes: List[MatchedRemote] = field(default_factory=list)

    @property
    def notifiable_remote(self) -> Optional[MatchedRemote]:
        """First matched remote whose source accepts hook notifications."""
        for remote in self.matched_remotes:
            if not remote.ignore_notify_commit:
                return remote
        return None
