"""Pydantic models for incoming webhook payloads.

Only the fields the dispatcher reads are modelled; everything else in the
payload is ignored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RepositoryPayload(_Payload):
    remote_url: str = Field(..., alias="remoteUrl")
    name: Optional[str] = None


class RefUpdatePayload(_Payload):
    name: Optional[str] = None
    old_object_id: Optional[str] = Field(None, alias="oldObjectId")
    new_object_id: Optional[str] = Field(None, alias="newObjectId")


class CommitPayload(_Payload):
    commit_id: str = Field(..., alias="commitId")


class IdentityPayload(_Payload):
    display_name: Optional[str] = Field(None, alias="displayName")
    unique_name: Optional[str] = Field(None, alias="uniqueName")


class PushResourcePayload(_Payload):
    repository: RepositoryPayload
    ref_updates: List[RefUpdatePayload] = Field(default_factory=list, alias="refUpdates")
    commits: List[CommitPayload] = Field(default_factory=list)
    pushed_by: Optional[IdentityPayload] = Field(None, alias="pushedBy")


class ServiceHookPayload(_Payload):
    """``git.push`` service-hook notification."""

    event_type: str = Field(..., alias="eventType")
    resource: PushResourcePayload


class FlatPushPayload(_Payload):
    """Minimal payload: ``{"commitId": ..., "repositoryUri": ...}``."""

    commit_id: str = Field(..., alias="commitId")
    repository_uri: str = Field(..., alias="repositoryUri")
    pusher: Optional[str] = None
