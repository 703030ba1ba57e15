"""In-memory build queue that records every call for assertions."""

import threading
from typing import List, Optional

from hookdispatch.domain.models import BuildCause, BuildRequest, JobCandidate, RequestType
from hookdispatch.queue.base import BuildQueueClient
from hookdispatch.queue.exceptions import BuildQueueError


class RecordingBuildQueue(BuildQueueClient):
    """Build queue that keeps requests in a list instead of sending them."""

    def __init__(self):
        self.requests: List[BuildRequest] = []
        self._lock = threading.Lock()

    def schedule_build(
        self, job: JobCandidate, quiet_period_seconds: int, cause: BuildCause
    ) -> BuildRequest:
        request = self._new_request(job, RequestType.BUILD, cause, quiet_period_seconds)
        with self._lock:
            self.requests.append(request)
        return request

    def request_poll(self, job: JobCandidate, cause: BuildCause) -> BuildRequest:
        request = self._new_request(job, RequestType.POLL, cause)
        with self._lock:
            self.requests.append(request)
        return request

    @property
    def builds(self) -> List[BuildRequest]:
        return [r for r in self.requests if r.request_type == RequestType.BUILD]

    @property
    def polls(self) -> List[BuildRequest]:
        return [r for r in self.requests if r.request_type == RequestType.POLL]

    def job_ids(self) -> List[str]:
        return [r.job_id for r in self.requests]


class FailingBuildQueue(RecordingBuildQueue):
    """Records requests but raises BuildQueueError for one job."""

    def __init__(self, failing_job_id: Optional[str] = None):
        super().__init__()
        self.failing_job_id = failing_job_id

    def _check(self, job: JobCandidate) -> None:
        if self.failing_job_id is None or job.job_id == self.failing_job_id:
            raise BuildQueueError(f"queue rejected {job.job_id}")

    def schedule_build(self, job, quiet_period_seconds, cause):
        self._check(job)
        return super().schedule_build(job, quiet_period_seconds, cause)

    def request_poll(self, job, cause):
        self._check(job)
        return super().request_poll(job, cause)
