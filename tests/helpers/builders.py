"""Factories for jobs and registries used across tests."""

from typing import Iterable, List, Optional

from hookdispatch.domain.models import (
    CustomPushTrigger,
    ExplicitPollTrigger,
    JobCandidate,
    Remote,
    ScmKind,
    ScmSource,
)
from hookdispatch.registry.sources import InMemoryJobRegistry


def make_job(
    job_id: str,
    urls: Optional[Iterable[str]] = None,
    *,
    poll: Optional[bool] = None,
    push: bool = False,
    poll_ignores_hooks: bool = False,
    disabled: bool = False,
    ignore_notify_commit: bool = False,
    quiet_period_seconds: int = 0,
    scm_kind: ScmKind = ScmKind.GIT,
    display_name: Optional[str] = None,
    readers: Optional[List[str]] = None,
) -> JobCandidate:
    """Build a job with a single source and remote.

    ``poll`` adds an ExplicitPollTrigger; ``poll_ignores_hooks`` implies it.
    """
    triggers = []
    if poll or poll_ignores_hooks:
        triggers.append(ExplicitPollTrigger(ignore_post_commit_hooks=poll_ignores_hooks))
    if push:
        triggers.append(CustomPushTrigger())

    scms = []
    if urls is not None:
        scms.append(
            ScmSource(
                kind=scm_kind,
                remotes=[Remote(name="origin", urls=list(urls))],
                ignore_notify_commit=ignore_notify_commit,
            )
        )

    return JobCandidate(
        job_id=job_id,
        display_name=display_name,
        disabled=disabled,
        quiet_period_seconds=quiet_period_seconds,
        scms=scms,
        triggers=triggers,
        readers=readers or [],
    )


def make_registry(*jobs: JobCandidate) -> InMemoryJobRegistry:
    return InMemoryJobRegistry(jobs)
