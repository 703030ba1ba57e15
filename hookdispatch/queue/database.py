"""Build queue that records requests in the local database.

A separate build runner consumes the ``build_requests`` table.
"""

from hookdispatch.domain.models import BuildCause, BuildRequest, JobCandidate, RequestType
from hookdispatch.logging import get_logger
from hookdispatch.persistence import BuildRequestRepository, PersistenceError, get_session

from .base import BuildQueueClient
from .exceptions import BuildQueueError

logger = get_logger(__name__, component="queue")


class DatabaseBuildQueue(BuildQueueClient):
    """Queue client backed by the persistence layer.

    init_database() must have been called before the first request.
    """

    def schedule_build(
        self, job: JobCandidate, quiet_period_seconds: int, cause: BuildCause
    ) -> BuildRequest:
        request = self._new_request(job, RequestType.BUILD, cause, quiet_period_seconds)
        return self._record(request)

    def request_poll(self, job: JobCandidate, cause: BuildCause) -> BuildRequest:
        request = self._new_request(job, RequestType.POLL, cause)
        return self._record(request)

    def _record(self, request: BuildRequest) -> BuildRequest:
        try:
            with get_session() as session:
                stored = BuildRequestRepository(session).add(request)
        except PersistenceError as e:
            logger.error(
                f"Failed to queue {request.request_type.value} for job {request.job_id}: {e}",
                extra={
                    "event": "queue.request.failed",
                    "job_id": request.job_id,
                    "request_type": request.request_type.value,
                },
            )
            raise BuildQueueError(f"Failed to queue request for {request.job_id}: {e}") from e

        logger.info(
            f"Queued {request.request_type.value} for job {request.job_id}",
            extra={
                "event": "queue.request.recorded",
                "job_id": request.job_id,
                "request_id": request.request_id,
                "request_type": request.request_type.value,
                "quiet_period_seconds": request.quiet_period_seconds,
            },
        )
        return stored
