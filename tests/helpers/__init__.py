"""Test helper utilities for push hook dispatcher tests."""

from .builders import make_job, make_registry
from .recording_queue import FailingBuildQueue, RecordingBuildQueue

__all__ = ["RecordingBuildQueue", "FailingBuildQueue", "make_job", "make_registry"]
