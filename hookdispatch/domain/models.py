"""Core domain models for push events, jobs, and their triggers.

This module defines the data structures shared by the scanner, the trigger
policy and the build queue clients:
- PushEvent: a parsed "code was pushed" notification
- JobCandidate: a point-in-time view of one registry entry
- ScmSource / Remote: a job's source configuration
- TriggerConfig: closed tagged variant of the trigger kinds a job can carry
- BuildCause: metadata attached to every build or poll request
- BuildRequest: a build or poll request as handed to a queue client
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hookdispatch.utils.redaction import redact_credentials


class ScmKind(str, Enum):
    """Source control kinds a job may be configured with.

    Only GIT is tracked by the dispatcher; the others exist so that mixed
    registries can be described and skipped.
    """

    GIT = "git"
    SUBVERSION = "svn"
    MERCURIAL = "hg"


class TriggerKind(str, Enum):
    """Trigger strategies, listed in precedence order."""

    GLOBAL_AUTO = "global_auto"
    POLL = "poll"
    PUSH = "push"


class CauseKind(str, Enum):
    """Why a build or poll was requested."""

    PUSH_HOOK = "push_hook"
    PUSH_TRIGGER = "push_trigger"


class PushEvent(BaseModel):
    """A push notification for one remote repository."""

    commit_id: str = Field(..., description="Commit the push moved the branch to")
    repository_uri: str = Field(..., description="Remote URL the push was made to")
    pusher: Optional[str] = Field(None, description="Display name of whoever pushed")

    model_config = ConfigDict(frozen=True)

    @field_validator("commit_id", "repository_uri")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Strip whitespace and reject blank values."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()


class Remote(BaseModel):
    """A named remote with one or more URLs (fetch URL first)."""

    name: str = "origin"
    urls: List[str] = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)


class ScmSource(BaseModel):
    """One source-control configuration of a job."""

    kind: ScmKind = ScmKind.GIT
    remotes: List[Remote] = Field(default_factory=list)
    ignore_notify_commit: bool = Field(
        False, description="Opt out of hook-driven notifications for these remotes"
    )

    model_config = ConfigDict(frozen=True)


class GlobalAutoTrigger(BaseModel):
    """Auto-trigger applied to every job by the global configuration."""

    kind: Literal["global_auto"] = "global_auto"

    model_config = ConfigDict(frozen=True)


class ExplicitPollTrigger(BaseModel):
    """A polling trigger configured on the job."""

    kind: Literal["poll"] = "poll"
    ignore_post_commit_hooks: bool = False

    model_config = ConfigDict(frozen=True)


class CustomPushTrigger(BaseModel):
    """A push trigger registered on the job in place of the polling trigger."""

    kind: Literal["push"] = "push"
    ignore_post_commit_hooks: bool = False

    model_config = ConfigDict(frozen=True)


TriggerConfig = Union[GlobalAutoTrigger, ExplicitPollTrigger, CustomPushTrigger]

# Triggers a job can carry itself; GlobalAutoTrigger is derived from global settings.
JobTrigger = Annotated[
    Union[ExplicitPollTrigger, CustomPushTrigger],
    Field(discriminator="kind"),
]


class JobCandidate(BaseModel):
    """Snapshot of one job as seen by a single dispatch.

    The registry owns the underlying job; nothing here is written back.
    """

    job_id: str = Field(..., min_length=1)
    display_name: Optional[str] = None
    disabled: bool = False
    quiet_period_seconds: int = Field(0, ge=0)
    scms: List[ScmSource] = Field(default_factory=list)
    triggers: List[JobTrigger] = Field(default_factory=list)
    readers: List[str] = Field(
        default_factory=list,
        description="Identities allowed to see this job without elevation",
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_single_trigger_per_kind(self):
        """A job carries at most one trigger of each kind."""
        seen = set()
        for trigger in self.triggers:
            if trigger.kind in seen:
                raise ValueError(
                    f"Job '{self.job_id}' has more than one '{trigger.kind}' trigger"
                )
            seen.add(trigger.kind)
        return self

    @property
    def full_display_name(self) -> str:
        return self.display_name or self.job_id

    @property
    def is_disabled(self) -> bool:
        return self.disabled

    @property
    def git_sources(self) -> List[ScmSource]:
        return [scm for scm in self.scms if scm.kind == ScmKind.GIT]

    @property
    def has_git_source(self) -> bool:
        return bool(self.git_sources)

    @property
    def remotes(self) -> List[str]:
        """Every configured Git URL, in configuration order."""
        return [url for scm in self.git_sources for remote in scm.remotes for url in remote.urls]



class BuildCause(BaseModel):
    """Metadata handed to the build queue with every request."""

    kind: CauseKind
    commit_id: str
    repository_uri: str
    pusher: Optional[str] = None
    report_status: bool = Field(
        False, description="Ask the build to post commit status back to the server"
    )

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    @property
    def short_description(self) -> str:
        """One-line description shown alongside the queued build."""
        who = f" by {self.pusher}" if self.pusher else ""
        return f"Started by a push{who} of {self.commit_id[:12]} to {self.repository_uri}"


class RequestType(str, Enum):
    """What was asked of the build queue."""

    BUILD = "build"
    POLL = "poll"


class BuildRequest(BaseModel):
    """A build or poll request as recorded or sent by a queue client."""

    request_id: str = Field(..., description="Unique id of this request")
    job_id: str
    request_type: RequestType
    quiet_period_seconds: int = Field(0, ge=0)
    cause: BuildCause
    requested_at: datetime

    @field_validator("requested_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Treat naive datetimes as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    def to_payload(self) -> dict:
        """JSON-ready representation used by the HTTP queue client, with URI credentials masked."""
        return {
            "request_id": self.request_id,
            "job_id": self.job_id,
            "type": self.request_type.value,
            "quiet_period_seconds": self.quiet_period_seconds,
            "requested_at": self.requested_at.isoformat(),
            "cause": {
                "kind": self.cause.kind,
                "commit_id": self.cause.commit_id,
                "repository_uri": redact_credentials(self.cause.repository_uri),
                "pusher": self.cause.pusher,
                "report_status": self.cause.report_status,
                "description": redact_credentials(self.cause.short_description),
            },
        }
