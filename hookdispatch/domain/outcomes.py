"""Outcome and result models for a single dispatch."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OutcomeKind(str, Enum):
    """What happened to one matched job."""

    SCHEDULED_IMMEDIATE = "scheduled_immediate"
    SCHEDULED_VIA_POLL = "scheduled_via_poll"
    CUSTOM_HANDLED = "custom_handled"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    """Why a matched job was left alone."""

    JOB_DISABLED = "job_disabled"
    HOOKS_OPTED_OUT = "hooks_opted_out"
    NO_TRIGGER_CONFIGURED = "no_trigger_configured"


class DispatchOutcome(BaseModel):
    """Outcome for one matched job.

    ``bypass_polling`` only matters for CUSTOM_HANDLED outcomes, which render
    like an immediate build when set and like a poll otherwise.
    """

    kind: OutcomeKind
    job_id: str
    display_name: str
    bypass_polling: bool = False
    reason: Optional[SkipReason] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_skipped(self) -> bool:
        return self.kind == OutcomeKind.SKIPPED

    @property
    def renders_as_immediate(self) -> bool:
        if self.kind == OutcomeKind.CUSTOM_HANDLED:
            return self.bypass_polling
        return self.kind == OutcomeKind.SCHEDULED_IMMEDIATE

    @classmethod
    def skipped(cls, job_id: str, display_name: str, reason: SkipReason) -> "DispatchOutcome":
        return cls(kind=OutcomeKind.SKIPPED, job_id=job_id, display_name=display_name, reason=reason)


class DispatchResult(BaseModel):
    """Aggregate of one dispatch.

    Only ``messages`` is part of the response sent back to the webhook
    caller; the other fields exist for logging and tests.
    """

    scm_capable_jobs_found: bool = False
    matched_repository_count: int = 0
    outcomes: List[DispatchOutcome] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)
    registry_unavailable: bool = False

    @property
    def scheduled(self) -> List[DispatchOutcome]:
        return [o for o in self.outcomes if not o.is_skipped]

    @property
    def skipped(self) -> List[DispatchOutcome]:
        return [o for o in self.outcomes if o.is_skipped]

    def to_payload(self) -> dict:
        return {"messages": list(self.messages)}
