"""Tests for webhook payload parsing."""

import json

import pytest

from hookdispatch.events import (
    EventError,
    EventParseError,
    UnsupportedEventError,
    parse_push_event,
)


@pytest.fixture
def service_hook_payload():
    """A git.push service-hook notification."""
    return {
        "subscriptionId": "00000000-0000-0000-0000-000000000000",
        "eventType": "git.push",
        "publisherId": "tfs",
        "resource": {
            "commits": [
                {"commitId": "33b55f7cb7e7e245323987634f960cf4a6e6bc74", "comment": "Fixed bug"}
            ],
            "refUpdates": [
                {
                    "name": "refs/heads/main",
                    "oldObjectId": "aad331d8d3b131fa9ae03cf5e53965b51942618a",
                    "newObjectId": "33b55f7cb7e7e245323987634f960cf4a6e6bc74",
                }
            ],
            "repository": {
                "name": "Fabrikam",
                "remoteUrl": "https://example.com/DefaultCollection/_git/Fabrikam",
            },
            "pushedBy": {"displayName": "Jamal Hartnett", "uniqueName": "jamal@example.com"},
        },
    }


class TestServiceHookPayload:
    """Test the git.push service-hook shape."""

    def test_parse(self, service_hook_payload):
        """Test the commit, URI and pusher are extracted."""
        event = parse_push_event(service_hook_payload)

        assert event.commit_id == "33b55f7cb7e7e245323987634f960cf4a6e6bc74"
        assert event.repository_uri == "https://example.com/DefaultCollection/_git/Fabrikam"
        assert event.pusher == "Jamal Hartnett"

    def test_parse_raw_json(self, service_hook_payload):
        """Test raw JSON text is accepted."""
        event = parse_push_event(json.dumps(service_hook_payload))
        assert event.commit_id.startswith("33b55f7")

    def test_falls_back_to_commits(self, service_hook_payload):
        """Test the newest commit is used when no ref update carries one."""
        service_hook_payload["resource"]["refUpdates"] = []
        service_hook_payload["resource"]["commits"] = [{"commitId": "newest"}, {"commitId": "older"}]
        assert parse_push_event(service_hook_payload).commit_id == "newest"

    def test_branch_deletion_is_ignored(self, service_hook_payload):
        """Test a ref update deleting a branch is not taken as the pushed commit."""
        service_hook_payload["resource"]["refUpdates"] = [
            {"name": "refs/heads/old", "newObjectId": "0" * 40},
            {"name": "refs/heads/main", "newObjectId": "feedface"},
        ]
        assert parse_push_event(service_hook_payload).commit_id == "feedface"

    def test_missing_commit(self, service_hook_payload):
        """Test a push with no commit at all is rejected."""
        service_hook_payload["resource"]["refUpdates"] = []
        service_hook_payload["resource"]["commits"] = []
        with pytest.raises(EventParseError, match="no pushed commit"):
            parse_push_event(service_hook_payload)

    def test_missing_repository(self, service_hook_payload):
        """Test a missing remote URL is reported with its location."""
        del service_hook_payload["resource"]["repository"]["remoteUrl"]
        with pytest.raises(EventParseError, match="remoteUrl"):
            parse_push_event(service_hook_payload)

    def test_pusher_is_optional(self, service_hook_payload):
        """Test events without pushedBy."""
        del service_hook_payload["resource"]["pushedBy"]
        assert parse_push_event(service_hook_payload).pusher is None

    def test_other_event_types_rejected(self, service_hook_payload):
        """Test non-push events raise UnsupportedEventError."""
        service_hook_payload["eventType"] = "git.pullrequest.created"
        with pytest.raises(UnsupportedEventError) as exc_info:
            parse_push_event(service_hook_payload)
        assert exc_info.value.event_type == "git.pullrequest.created"
        assert isinstance(exc_info.value, EventError)


class TestFlatPayload:
    """Test the flat payload shape."""

    def test_parse(self):
        """Test commitId and repositoryUri."""
        event = parse_push_event(
            {"commitId": " abc123 ", "repositoryUri": "git@example.com:org/repo.git"}
        )
        assert event.commit_id == "abc123"
        assert event.repository_uri == "git@example.com:org/repo.git"

    def test_blank_commit(self):
        """Test whitespace-only values are rejected."""
        with pytest.raises(EventParseError):
            parse_push_event({"commitId": "  ", "repositoryUri": "https://example.com/org/repo"})

    def test_missing_fields(self):
        """Test a payload lacking required fields."""
        with pytest.raises(EventParseError, match="repositoryUri"):
            parse_push_event({"commitId": "abc123"})


class TestMalformedPayload:
    """Test payloads that are not JSON objects."""

    def test_invalid_json(self):
        with pytest.raises(EventParseError, match="not valid JSON"):
            parse_push_event("{not json")

    def test_non_object(self):
        with pytest.raises(EventParseError, match="JSON object"):
            parse_push_event("[1, 2, 3]")
