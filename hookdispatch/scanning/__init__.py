"""Registry scanning for jobs affected by a push event."""

from .models import MatchedRemote, ScanEntry, ScanStats
from .scanner import JobScanner

__all__ = [
    "JobScanner",
    "ScanEntry",
    "ScanStats",
    "MatchedRemote",
]
