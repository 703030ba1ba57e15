"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from hookdispatch.domain.models import JobCandidate, JobTrigger, ScmSource

from .duration import DurationParseError, parse_duration, validate_duration_range

MAX_QUIET_PERIOD_SECONDS = 86400


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class QueueBackend(str, Enum):
    """Where build and poll requests are sent."""

    DATABASE = "database"
    HTTP = "http"


class GlobalSettings(BaseModel):
    """Server-wide push trigger settings."""

    auto_trigger_all_jobs: bool = Field(
        False, description="Treat every Git job as if it had a push trigger"
    )
    commit_status: bool = Field(
        False, description="Ask triggered builds to report commit status"
    )

    def is_auto_trigger_enabled_for_all_jobs(self) -> bool:
        return self.auto_trigger_all_jobs

    def is_commit_status_enabled(self) -> bool:
        return self.commit_status


class JobConfig(BaseModel):
    """Configuration for a single build job."""

    id: str = Field(..., min_length=1, description="Unique job identifier")
    display_name: Optional[str] = Field(None, description="Name shown in responses")
    disabled: bool = Field(False, description="Disabled jobs are never triggered")
    quiet_period: Union[int, str] = Field(
        0, description="Delay before a queued build starts (seconds or duration string)"
    )
    readers: List[str] = Field(
        default_factory=list, description="Identities that may see the job unelevated"
    )
    scms: List[ScmSource] = Field(default_factory=list, description="Source configurations")
    triggers: List[JobTrigger] = Field(
        default_factory=list, description="Job-level triggers ('poll' and/or 'push')"
    )

    # Computed field
    quiet_period_seconds: Optional[int] = None

    @field_validator("id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        """Strip whitespace from the job id."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("quiet_period")
    @classmethod
    def validate_quiet_period(cls, v: Union[int, str]) -> Union[int, str]:
        """Validate the quiet period parses and lies within a day."""
        try:
            seconds = parse_duration(v, allow_zero=True)
            validate_duration_range(
                seconds, max_seconds=MAX_QUIET_PERIOD_SECONDS, label="Quiet period"
            )
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def validate_triggers_and_compute_fields(self):
        """Reject duplicate trigger kinds and compute quiet_period_seconds."""
        kinds = [trigger.kind for trigger in self.triggers]
        duplicates = sorted({kind for kind in kinds if kinds.count(kind) > 1})
        if duplicates:
            raise ValueError(
                f"Job '{self.id}' declares more than one trigger of kind: {', '.join(duplicates)}"
            )

        self.quiet_period_seconds = parse_duration(self.quiet_period, allow_zero=True)
        return self

    def to_candidate(self) -> JobCandidate:
        """Build the read-only view handed to the scanner."""
        return JobCandidate(
            job_id=self.id,
            display_name=self.display_name,
            disabled=self.disabled,
            quiet_period_seconds=self.quiet_period_seconds or 0,
            scms=list(self.scms),
            triggers=list(self.triggers),
            readers=list(self.readers),
        )


class BuildQueueConfig(BaseModel):
    """Build queue client settings."""

    backend: QueueBackend = Field(QueueBackend.DATABASE, description="database or http")
    url: Optional[str] = Field(None, description="Base URL of the remote build server")
    timeout: int = Field(30, ge=5, le=300, description="HTTP request timeout (seconds)")
    user_agent: str = Field("PushHookDispatcher/1.0", min_length=1)

    model_config = {"use_enum_values": True}

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        """Require an http(s) URL and drop trailing slashes."""
        if v is None:
            return None
        stripped = v.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("build_queue.url must start with http:// or https://")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the push hook dispatcher."""

    global_settings: GlobalSettings = Field(default_factory=GlobalSettings)
    jobs: List[JobConfig] = Field(default_factory=list, description="Job registry")
    build_queue: BuildQueueConfig = Field(default_factory=BuildQueueConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def validate_unique_job_ids(self):
        """Job ids must be unique across the registry."""
        seen = set()
        for job in self.jobs:
            if job.id in seen:
                raise ValueError(f"Duplicate job id: '{job.id}' appears multiple times")
            seen.add(job.id)
        return self

    def get_job(self, job_id: str) -> Optional[JobConfig]:
        """Look up a job by id."""
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None
