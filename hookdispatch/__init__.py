"""Push hook dispatcher: turns Git push notifications into build requests."""

__version__ = "1.0.0"
