"""Repository identity matching between push events and job remotes."""

import logging
from typing import Iterable, Optional, Union

from .uri import RemoteURI, parse_remote_uri

logger = logging.getLogger(__name__)

UriLike = Union[str, RemoteURI, None]


def _as_remote(uri: UriLike) -> Optional[RemoteURI]:
    if isinstance(uri, RemoteURI):
        return uri
    return parse_remote_uri(uri)


class RepositoryMatcher:
    """Decides whether two remote URIs point at the same repository.

    SSH and HTTP(S) forms of the same remote compare equal: the transport
    family, host, non-default port and normalised path must agree.
    Unparsable URIs never match anything.
    """

    @staticmethod
    def same_repository(a: UriLike, b: UriLike) -> bool:
        """Return True if ``a`` and ``b`` denote the same remote repository.

        Args:
            a: Remote URI (string or parsed)
            b: Remote URI (string or parsed)

        Returns:
            True on a match; False on mismatch or malformed input
        """
        left = _as_remote(a)
        right = _as_remote(b)
        if left is None or right is None:
            return False
        return left.identity() == right.identity()

    def first_match(self, target: UriLike, candidates: Iterable[str]) -> Optional[str]:
        """Return the first candidate URL that matches ``target``.

        Args:
            target: URI to look for (usually the event's repository URI)
            candidates: URLs in configuration order

        Returns:
            The matching candidate as configured, or None
        """
        parsed_target = _as_remote(target)
        if parsed_target is None:
            logger.debug("Unparsable target URI never matches", extra={"uri": str(target)})
            return None

        for candidate in candidates:
            if self.same_repository(parsed_target, candidate):
                return candidate
        return None
