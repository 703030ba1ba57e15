"""Turns raw webhook payloads into PushEvent instances.

Two payload shapes are accepted:

- The ``git.push`` service-hook notification::

    {
      "eventType": "git.push",
      "resource": {
        "repository": {"remoteUrl": "https://example.com/org/repo.git"},
        "refUpdates": [{"name": "refs/heads/main", "newObjectId": "abc123"}],
        "pushedBy": {"displayName": "Jane"}
      }
    }

- A flat payload: ``{"commitId": "abc123", "repositoryUri": "..."}``
"""

import json
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from hookdispatch.domain.models import PushEvent
from hookdispatch.logging import get_logger

from .exceptions import EventParseError, UnsupportedEventError
from .models import FlatPushPayload, ServiceHookPayload

logger = get_logger(__name__, component="events")

PUSH_EVENT_TYPE = "git.push"

# newObjectId of a ref update that deletes the branch
NULL_OBJECT_ID = "0" * 40


def parse_push_event(payload: Union[str, bytes, Mapping[str, Any]]) -> PushEvent:
    """
    Parse a webhook payload into a PushEvent.

    Args:
        payload: Decoded JSON mapping, or the raw JSON text

    Returns:
        PushEvent

    Raises:
        UnsupportedEventError: If the payload names an event type other than git.push
        EventParseError: If the payload is malformed or carries no commit
    """
    data = _decode(payload)

    if "eventType" in data:
        return _from_service_hook(data)
    return _from_flat(data)


def _decode(payload: Union[str, bytes, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise EventParseError(f"Event payload is not valid JSON: {e}") from e

    if not isinstance(payload, Mapping):
        raise EventParseError(
            f"Event payload must be a JSON object, got {type(payload).__name__}"
        )
    return payload


def _from_service_hook(data: Mapping[str, Any]) -> PushEvent:
    event_type = data.get("eventType")
    if event_type != PUSH_EVENT_TYPE:
        raise UnsupportedEventError(str(event_type))

    try:
        hook = ServiceHookPayload.model_validate(data)
    except ValidationError as e:
        raise EventParseError(_describe(e)) from e

    resource = hook.resource
    commit_id = _pushed_commit(resource)
    if commit_id is None:
        raise EventParseError("git.push event carries no pushed commit")

    pusher = resource.pushed_by.display_name if resource.pushed_by else None

    logger.debug(
        "Parsed git.push service hook",
        extra={
            "event": "events.parsed",
            "ref_update_count": len(resource.ref_updates),
            "commit_count": len(resource.commits),
        },
    )
    return _build_event(commit_id, resource.repository.remote_url, pusher)


def _pushed_commit(resource) -> Optional[str]:
    """Commit the push moved a ref to; falls back to the newest listed commit."""
    for update in resource.ref_updates:
        if update.new_object_id and update.new_object_id != NULL_OBJECT_ID:
            return update.new_object_id
    if resource.commits:
        return resource.commits[0].commit_id
    return None


def _from_flat(data: Mapping[str, Any]) -> PushEvent:
    try:
        flat = FlatPushPayload.model_validate(data)
    except ValidationError as e:
        raise EventParseError(_describe(e)) from e
    return _build_event(flat.commit_id, flat.repository_uri, flat.pusher)


def _build_event(commit_id: str, repository_uri: str, pusher: Optional[str]) -> PushEvent:
    try:
        return PushEvent(commit_id=commit_id, repository_uri=repository_uri, pusher=pusher)
    except ValidationError as e:
        raise EventParseError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(loc) for loc in err["loc"]) or "payload"
        parts.append(f"{location}: {err['msg']}")
    return "Invalid push event: " + "; ".join(parts)
