"""Execution of the push trigger.

The push trigger is what both the global auto-trigger and a job's own
custom push trigger run: it either queues a build right away or asks the
job to poll its repositories.
"""

from hookdispatch.domain.models import BuildCause, BuildRequest, JobCandidate
from hookdispatch.logging import get_logger
from hookdispatch.queue.base import BuildQueueClient

logger = get_logger(__name__, component="trigger")


class PushTrigger:
    """Push trigger bound to one job and one build queue."""

    def __init__(self, job: JobCandidate, queue: BuildQueueClient):
        self.job = job
        self.queue = queue

    def execute(self, cause: BuildCause, bypass_polling: bool = False) -> BuildRequest:
        """Fire the trigger once.

        Args:
            cause: Cause attached to the request
            bypass_polling: Schedule a build with the job's quiet period
                instead of requesting a poll

        Returns:
            The request handed to the queue

        Raises:
            BuildQueueError: Propagated from the queue client
        """
        if bypass_polling:
            logger.debug(
                f"Scheduling {self.job.job_id} without polling",
                extra={"event": "trigger.push.build", "job_id": self.job.job_id},
            )
            return self.queue.schedule_build(self.job, self.job.quiet_period_seconds, cause)

        logger.debug(
            f"Requesting poll of {self.job.job_id}",
            extra={"event": "trigger.push.poll", "job_id": self.job.job_id},
        )
        return self.queue.request_poll(self.job, cause)
