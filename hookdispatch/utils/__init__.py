"""Utility functions for credential redaction and time handling."""

from .redaction import redact_credentials
from .timestamps import ensure_utc, format_timestamp, parse_iso_datetime, utc_now

__all__ = [
    "redact_credentials",
    "utc_now",
    "ensure_utc",
    "format_timestamp",
    "parse_iso_datetime",
]
