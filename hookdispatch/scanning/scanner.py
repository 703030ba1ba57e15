"""Registry scan that finds the jobs a push event concerns."""

from typing import Iterator, Optional

from hookdispatch.domain.models import PushEvent
from hookdispatch.logging import get_logger
from hookdispatch.matching.engine import RepositoryMatcher
from hookdispatch.matching.uri import parse_remote_uri
from hookdispatch.registry.base import JobRegistryView
from hookdispatch.security.privilege import Identity

from .models import MatchedRemote, ScanEntry, ScanStats

logger = get_logger(__name__, component="scanner")


class JobScanner:
    """
    Walks the job registry and yields jobs whose Git remotes match an event.

    The scan is lazy: jobs are read from the registry one at a time and
    ``stats`` is updated as the sequence is consumed, so counters are only
    final once the iterator is exhausted.
    """

    def __init__(self, matcher: Optional[RepositoryMatcher] = None):
        self.matcher = matcher or RepositoryMatcher()

    def scan(
        self,
        registry: JobRegistryView,
        event: PushEvent,
        identity: Identity,
        stats: ScanStats,
    ) -> Iterator[ScanEntry]:
        """
        Yield a ScanEntry for every Git job with at least one matching remote.

        Args:
            registry: Registry to enumerate
            event: Push event whose repository URI is matched
            identity: Identity the registry is read as
            stats: Counters updated in place

        Yields:
            ScanEntry per matching job, in registry order

        Raises:
            RegistryUnavailableError: If the registry cannot be read
        """
        event_uri = parse_remote_uri(event.repository_uri)
        if event_uri is None:
            logger.debug(
                "Event repository URI could not be parsed; nothing will match",
                extra={"event": "scan.uri_unparsable", "repository_uri": event.repository_uri},
            )

        for job in registry.all_jobs(identity):
            stats.jobs_seen += 1
            if not job.has_git_source:
                continue
            stats.scm_capable_jobs += 1

            matched = []
            for scm in job.git_sources:
                for remote in scm.remotes:
                    url = self.matcher.first_match(event_uri, remote.urls)
                    if url is None:
                        continue
                    # A remote counts once however many of its URLs match.
                    stats.matched_repository_count += 1
                    matched.append(
                        MatchedRemote(
                            remote_name=remote.name,
                            url=url,
                            ignore_notify_commit=scm.ignore_notify_commit,
                        )
                    )

            if matched:
                logger.debug(
                    f"Job {job.job_id} matched {len(matched)} remote(s)",
                    extra={
                        "event": "scan.job.matched",
                        "job_id": job.job_id,
                        "remotes": [m.remote_name for m in matched],
                    },
                )
                yield ScanEntry(job=job, matched_remotes=matched)
