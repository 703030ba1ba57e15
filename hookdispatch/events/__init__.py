"""Webhook payload parsing."""

from .exceptions import EventError, EventParseError, UnsupportedEventError
from .parser import PUSH_EVENT_TYPE, parse_push_event

__all__ = [
    "parse_push_event",
    "PUSH_EVENT_TYPE",
    "EventError",
    "EventParseError",
    "UnsupportedEventError",
]
