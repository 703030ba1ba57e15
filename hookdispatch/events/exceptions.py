"""Exceptions raised while turning webhook payloads into push events."""


class EventError(Exception):
    """Base exception for event parsing errors."""

    pass


class EventParseError(EventError):
    """Payload is not valid JSON or lacks required fields."""

    pass


class UnsupportedEventError(EventError):
    """Payload describes an event other than a Git push."""

    def __init__(self, event_type: str) -> None:
        super().__init__(f"Unsupported event type: {event_type!r}")
        self.event_type = event_type
