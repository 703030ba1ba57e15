"""Duration parsing for quiet periods and timeouts."""

import re
from typing import Union


class DurationParseError(ValueError):
    """Raised when a duration cannot be parsed."""

    pass


_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}
_ISO_PATTERN = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$")


def parse_duration(value: Union[int, str], allow_zero: bool = False) -> int:
    """
    Parse a duration to whole seconds.

    Accepts:
    - Integers or digit strings, taken as seconds: 5, "30"
    - Human-readable: "30s", "2m", "1h30m"
    - ISO-8601: "PT30S", "PT2M", "P1D"

    Args:
        value: Duration to parse
        allow_zero: Whether a zero duration is acceptable

    Returns:
        Duration in seconds

    Raises:
        DurationParseError: If the value is invalid, negative, or zero when not allowed

    Examples:
        >>> parse_duration("2m")
        120
        >>> parse_duration("PT1M30S")
        90
        >>> parse_duration(0, allow_zero=True)
        0
    """
    if isinstance(value, bool):
        raise DurationParseError(f"Invalid duration: {value!r}")

    if isinstance(value, int):
        seconds = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise DurationParseError("Duration string cannot be empty")
        if text.isdigit():
            seconds = int(text)
        elif text.upper().startswith("P"):
            seconds = _parse_iso8601_duration(text)
        else:
            seconds = _parse_human_readable_duration(text)
    else:
        raise DurationParseError(f"Invalid duration type: {type(value).__name__}")

    if seconds < 0:
        raise DurationParseError(f"Duration cannot be negative: {value!r}")
    if seconds == 0 and not allow_zero:
        raise DurationParseError(f"Duration cannot be zero: {value!r}")

    return seconds


def _parse_iso8601_duration(duration_str: str) -> int:
    """Parse P[n]DT[n]H[n]M[n]S style durations."""
    match = _ISO_PATTERN.match(duration_str.upper())
    if not match:
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{duration_str}'. "
            "Expected format like 'PT30S', 'PT2M' or 'P1D'"
        )

    days, hours, minutes, seconds = match.groups()
    total = 0
    if days:
        total += int(days) * 86400
    if hours:
        total += int(hours) * 3600
    if minutes:
        total += int(minutes) * 60
    if seconds:
        total += int(float(seconds))
    return total


def _parse_human_readable_duration(duration_str: str) -> int:
    """Parse "30s", "15m", "1h30m" style durations."""
    matches = re.findall(r"(\d+)\s*([smhd])", duration_str.lower())
    if not matches:
        raise DurationParseError(
            f"Invalid duration format: '{duration_str}'. "
            "Expected format like '30s', '2m', '1h' or combinations like '1m30s'"
        )

    parsed_str = "".join(f"{num}{unit}" for num, unit in matches)
    if parsed_str != re.sub(r"\s+", "", duration_str.lower()):
        raise DurationParseError(
            f"Invalid characters in duration: '{duration_str}'. "
            "Use only digits and units: s (seconds), m (minutes), h (hours), d (days)"
        )

    return sum(int(num) * _UNIT_SECONDS[unit] for num, unit in matches)


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int = 0,
    max_seconds: int = 86400,
    label: str = "Duration",
) -> None:
    """
    Check that a duration lies within [min_seconds, max_seconds].

    Raises:
        DurationParseError: If the duration is out of range
    """
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"{label} too short: {_seconds_to_human_readable(duration_seconds)}. "
            f"Minimum is {_seconds_to_human_readable(min_seconds)}."
        )
    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"{label} too long: {_seconds_to_human_readable(duration_seconds)}. "
            f"Maximum is {_seconds_to_human_readable(max_seconds)}."
        )


def _seconds_to_human_readable(seconds: int) -> str:
    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"
    if seconds < 3600:
        minutes = seconds // 60
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    if seconds < 86400:
        hours = seconds // 3600
        return f"{hours} hour{'s' if hours != 1 else ''}"
    days = seconds // 86400
    return f"{days} day{'s' if days != 1 else ''}"
