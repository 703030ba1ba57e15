"""Dispatch orchestration for push events."""

from .aggregator import NO_GIT_JOBS_MESSAGE, ResponseAggregator, render_outcome
from .runner import PushDispatcher

__all__ = [
    "PushDispatcher",
    "ResponseAggregator",
    "render_outcome",
    "NO_GIT_JOBS_MESSAGE",
]
