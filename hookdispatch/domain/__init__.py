"""Domain models for the push hook dispatcher."""

from .models import (
    BuildCause,
    BuildRequest,
    CauseKind,
    CustomPushTrigger,
    ExplicitPollTrigger,
    GlobalAutoTrigger,
    JobCandidate,
    JobTrigger,
    PushEvent,
    Remote,
    RequestType,
    ScmKind,
    ScmSource,
    TriggerConfig,
    TriggerKind,
)
from .outcomes import DispatchOutcome, DispatchResult, OutcomeKind, SkipReason

__all__ = [
    "PushEvent",
    "JobCandidate",
    "ScmSource",
    "ScmKind",
    "Remote",
    "TriggerConfig",
    "JobTrigger",
    "TriggerKind",
    "GlobalAutoTrigger",
    "ExplicitPollTrigger",
    "CustomPushTrigger",
    "BuildCause",
    "CauseKind",
    "BuildRequest",
    "RequestType",
    "DispatchOutcome",
    "DispatchResult",
    "OutcomeKind",
    "SkipReason",
]
