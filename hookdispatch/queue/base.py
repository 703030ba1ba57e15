"""Base class for build queue clients.

A build queue client is the dispatcher's only way to affect the outside
world: it either schedules a build directly or asks the job to poll its
repositories for changes.
"""

import uuid
from abc import ABC, abstractmethod

from hookdispatch.domain.models import BuildCause, BuildRequest, JobCandidate, RequestType
from hookdispatch.utils.timestamps import utc_now


class BuildQueueClient(ABC):
    """Abstract build queue.

    Implementations must be safe to call from concurrent dispatches.
    """

    @abstractmethod
    def schedule_build(
        self, job: JobCandidate, quiet_period_seconds: int, cause: BuildCause
    ) -> BuildRequest:
        """Schedule a build of ``job`` after ``quiet_period_seconds``.

        Raises:
            BuildQueueError: If the request could not be queued
        """
        pass

    @abstractmethod
    def request_poll(self, job: JobCandidate, cause: BuildCause) -> BuildRequest:
        """Ask ``job`` to poll its repositories for new commits.

        Raises:
            BuildQueueError: If the request could not be queued
        """
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass

    @staticmethod
    def _new_request(
        job: JobCandidate,
        request_type: RequestType,
        cause: BuildCause,
        quiet_period_seconds: int = 0,
    ) -> BuildRequest:
        return BuildRequest(
            request_id=uuid.uuid4().hex,
            job_id=job.job_id,
            request_type=request_type,
            quiet_period_seconds=quiet_period_seconds,
            cause=cause,
            requested_at=utc_now(),
        )
