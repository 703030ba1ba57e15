"""Trigger precedence for jobs matched by a push event.

Each matched job gets exactly one outcome. The decision is made by the pure
``decide`` function; ``TriggerPolicy`` applies the guards, fires whatever
``decide`` picked and turns it into a DispatchOutcome.

Precedence, first satisfied wins:
    1. Global auto-trigger, unless the job's poll trigger ignores hooks
    2. The job's poll trigger, if it does not ignore hooks
    3. The job's custom push trigger
    4. Nothing: the job is skipped
"""

from enum import Enum

from hookdispatch.domain.models import (
    BuildCause,
    CauseKind,
    JobCandidate,
    PushEvent,
    TriggerKind,
)
from hookdispatch.domain.outcomes import DispatchOutcome, OutcomeKind, SkipReason
from hookdispatch.logging import get_logger
from hookdispatch.queue.base import BuildQueueClient
from hookdispatch.registry.base import TriggerRegistry
from hookdispatch.scanning.models import ScanEntry

from .push_trigger import PushTrigger

logger = get_logger(__name__, component="trigger")


class TriggerDecision(str, Enum):
    GLOBAL_AUTO = "global_auto"
    EXPLICIT_POLL = "explicit_poll"
    CUSTOM = "custom"
    NONE = "none"


def decide(job: JobCandidate, triggers: TriggerRegistry) -> TriggerDecision:
    """Pick the single trigger strategy that fires for ``job``.

    Guards (disabled job, opted-out remote) are not applied here.
    """
    poll = triggers.find(job, TriggerKind.POLL)
    poll_ignores_hooks = poll is not None and poll.ignore_post_commit_hooks

    if triggers.find(job, TriggerKind.GLOBAL_AUTO) is not None and not poll_ignores_hooks:
        return TriggerDecision.GLOBAL_AUTO

    if poll is not None and not poll_ignores_hooks:
        return TriggerDecision.EXPLICIT_POLL

    # The push trigger's own ignore flag is not consulted.
    if triggers.find(job, TriggerKind.PUSH) is not None:
        return TriggerDecision.CUSTOM

    return TriggerDecision.NONE


class TriggerPolicy:
    """Evaluates matched jobs against the trigger precedence and fires them."""

    def __init__(self, triggers: TriggerRegistry, queue: BuildQueueClient):
        self.triggers = triggers
        self.queue = queue

    def evaluate(
        self, entry: ScanEntry, event: PushEvent, bypass_polling: bool = False
    ) -> DispatchOutcome:
        """Produce the one outcome for a matched job.

        At most one queue call is made. Queue failures propagate.
        """
        job = entry.job
        name = job.full_display_name

        if job.is_disabled:
            logger.debug(
                f"Skipping disabled job {job.job_id}",
                extra={"event": "dispatch.job.skipped", "job_id": job.job_id,
                       "reason": SkipReason.JOB_DISABLED.value},
            )
            return DispatchOutcome.skipped(job.job_id, name, SkipReason.JOB_DISABLED)

        remote = entry.notifiable_remote
        if remote is None:
            logger.debug(
                f"Skipping {job.job_id}: matched remotes ignore hook notifications",
                extra={"event": "dispatch.job.skipped", "job_id": job.job_id,
                       "reason": SkipReason.HOOKS_OPTED_OUT.value},
            )
            return DispatchOutcome.skipped(job.job_id, name, SkipReason.HOOKS_OPTED_OUT)

        decision = decide(job, self.triggers)

        if decision == TriggerDecision.NONE:
            logger.debug(
                f"Job {job.job_id} matched {remote.url} but has no trigger to fire",
                extra={"event": "dispatch.job.skipped", "job_id": job.job_id,
                       "reason": SkipReason.NO_TRIGGER_CONFIGURED.value},
            )
            return DispatchOutcome.skipped(job.job_id, name, SkipReason.NO_TRIGGER_CONFIGURED)

        if decision == TriggerDecision.EXPLICIT_POLL:
            cause = self._cause(event, CauseKind.PUSH_HOOK)
            self.queue.schedule_build(job, job.quiet_period_seconds, cause)
            kind = OutcomeKind.SCHEDULED_IMMEDIATE
        else:
            cause = self._cause(event, CauseKind.PUSH_TRIGGER)
            PushTrigger(job, self.queue).execute(cause, bypass_polling)
            if decision == TriggerDecision.CUSTOM:
                kind = OutcomeKind.CUSTOM_HANDLED
            elif bypass_polling:
                kind = OutcomeKind.SCHEDULED_IMMEDIATE
            else:
                kind = OutcomeKind.SCHEDULED_VIA_POLL

        logger.info(
            f"Triggered {name} via {decision.value}",
            extra={
                "event": "dispatch.job.scheduled",
                "job_id": job.job_id,
                "decision": decision.value,
                "outcome": kind.value,
                "remote": remote.remote_name,
            },
        )
        return DispatchOutcome(
            kind=kind, job_id=job.job_id, display_name=name, bypass_polling=bypass_polling
        )

    def _cause(self, event: PushEvent, kind: CauseKind) -> BuildCause:
        return BuildCause(
            kind=kind,
            commit_id=event.commit_id,
            repository_uri=event.repository_uri,
            pusher=event.pusher,
            report_status=self.triggers.global_config.is_commit_status_enabled(),
        )
