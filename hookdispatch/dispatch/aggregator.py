"""Renders per-job outcomes into the response returned to the webhook caller."""

from typing import Iterable, List

from hookdispatch.domain.models import PushEvent
from hookdispatch.domain.outcomes import DispatchOutcome, DispatchResult
from hookdispatch.logging import get_logger
from hookdispatch.scanning.models import ScanStats

logger = get_logger(__name__, component="dispatch")

NO_GIT_JOBS_MESSAGE = "No Git jobs found"
NO_MATCH_WARNING = "No Git jobs matched the remote URL '{uri}' requested by an event."


def render_outcome(outcome: DispatchOutcome) -> str:
    if outcome.renders_as_immediate:
        return f"Scheduled {outcome.display_name}"
    return f"Scheduled polling of {outcome.display_name}"


class ResponseAggregator:
    """Builds a DispatchResult from scan counters and outcomes."""

    def build(
        self, outcomes: Iterable[DispatchOutcome], stats: ScanStats, event: PushEvent
    ) -> DispatchResult:
        """
        Render outcomes in scan order.

        Skipped outcomes are kept on the result but produce no message. When
        the registry holds no Git jobs the only message is NO_GIT_JOBS_MESSAGE.
        When Git jobs exist but none matched, the response is empty and a
        warning is logged instead.

        Args:
            outcomes: Outcomes in the order jobs were scanned
            stats: Final scan counters
            event: Event being dispatched (used for the no-match warning)

        Returns:
            DispatchResult
        """
        outcomes = list(outcomes)

        if not stats.scm_capable_jobs_found:
            messages: List[str] = [NO_GIT_JOBS_MESSAGE]
        else:
            messages = [render_outcome(o) for o in outcomes if not o.is_skipped]
            if stats.matched_repository_count == 0:
                logger.warning(
                    NO_MATCH_WARNING.format(uri=event.repository_uri),
                    extra={"event": "dispatch.no_match", "repository_uri": event.repository_uri},
                )

        return DispatchResult(
            scm_capable_jobs_found=stats.scm_capable_jobs_found,
            matched_repository_count=stats.matched_repository_count,
            outcomes=outcomes,
            messages=messages,
        )
