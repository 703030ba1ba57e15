"""Repository identity matching.

This module provides:
- RemoteURI: a remote reduced to the fields that identify a repository
- parse_remote_uri / normalize_remote_uri: URL and SCP-style parsing
- RepositoryMatcher: same-repository decision used by the job scanner
"""

from .engine import RepositoryMatcher
from .uri import RemoteURI, normalize_remote_uri, parse_remote_uri

__all__ = [
    "RepositoryMatcher",
    "RemoteURI",
    "parse_remote_uri",
    "normalize_remote_uri",
]
