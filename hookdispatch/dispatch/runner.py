"""Dispatch orchestration: scan, decide, fire, aggregate."""

import time
from typing import List, Optional
from uuid import uuid4

from hookdispatch.domain.models import PushEvent
from hookdispatch.domain.outcomes import DispatchOutcome, DispatchResult
from hookdispatch.logging import get_logger
from hookdispatch.logging.context import log_context
from hookdispatch.queue.base import BuildQueueClient
from hookdispatch.registry.base import GlobalConfigProvider, JobRegistryView, TriggerRegistry
from hookdispatch.registry.exceptions import RegistryUnavailableError
from hookdispatch.scanning.models import ScanStats
from hookdispatch.scanning.scanner import JobScanner
from hookdispatch.security.privilege import SYSTEM, Identity, with_elevated_identity
from hookdispatch.triggers.policy import TriggerPolicy

from .aggregator import ResponseAggregator

logger = get_logger(__name__, component="dispatch")


class PushDispatcher:
    """
    Turns one push event into build-scheduling actions.

    A dispatch runs synchronously on the calling thread. The dispatcher keeps
    no state between calls, so one instance can serve concurrent dispatches.
    """

    def __init__(
        self,
        registry: JobRegistryView,
        queue: BuildQueueClient,
        global_config: GlobalConfigProvider,
        scanner: Optional[JobScanner] = None,
        aggregator: Optional[ResponseAggregator] = None,
        identity: Identity = SYSTEM,
    ):
        """
        Initialize the dispatcher.

        Args:
            registry: Job registry to scan
            queue: Build queue that receives builds and poll requests
            global_config: Server-wide trigger settings
            scanner: Job scanner (default JobScanner())
            aggregator: Response aggregator (default ResponseAggregator())
            identity: Identity the registry is scanned as
        """
        self.registry = registry
        self.policy = TriggerPolicy(TriggerRegistry(global_config), queue)
        self.scanner = scanner or JobScanner()
        self.aggregator = aggregator or ResponseAggregator()
        self.identity = identity

    def dispatch(self, event: PushEvent, bypass_polling: bool = False) -> DispatchResult:
        """
        Dispatch a push event to every matching job.

        Args:
            event: Parsed push event
            bypass_polling: Schedule builds directly instead of requesting polls

        Returns:
            DispatchResult; ``registry_unavailable`` is set when the registry
            could not be read

        Raises:
            BuildQueueError: If firing a trigger fails; jobs after the failing
                one are not evaluated
        """
        dispatch_id = uuid4().hex
        started = time.time()

        with log_context(
            dispatch_id=dispatch_id,
            commit_id=event.commit_id,
            repository_uri=event.repository_uri,
        ):
            logger.info(
                "Dispatch started",
                extra={"event": "dispatch.started", "bypass_polling": bypass_polling},
            )

            stats = ScanStats()

            def scan_and_fire(identity: Identity) -> List[DispatchOutcome]:
                return [
                    self.policy.evaluate(entry, event, bypass_polling)
                    for entry in self.scanner.scan(self.registry, event, identity, stats)
                ]

            try:
                outcomes = with_elevated_identity(scan_and_fire, self.identity)
            except RegistryUnavailableError as e:
                logger.error(
                    f"Job registry unavailable: {e}",
                    extra={"event": "dispatch.registry_unavailable", "error_type": type(e).__name__},
                )
                return DispatchResult(registry_unavailable=True)

            result = self.aggregator.build(outcomes, stats, event)

            logger.info(
                "Dispatch completed",
                extra={
                    "event": "dispatch.completed",
                    "duration_ms": int((time.time() - started) * 1000),
                    "jobs_seen": stats.jobs_seen,
                    "scm_capable_jobs": stats.scm_capable_jobs,
                    "matched_repository_count": stats.matched_repository_count,
                    "scheduled_count": len(result.scheduled),
                    "skipped_count": len(result.skipped),
                },
            )
            return result
