"""Parsing and normalisation of Git remote URIs.

Supported forms:
- URL style: ``https://host/org/repo.git``, ``ssh://git@host:2222/org/repo``,
  ``git://host/org/repo``, ``git+ssh://...``, ``file:///srv/git/repo.git``
- SCP style: ``git@host:org/repo.git``, ``host:org/repo``
- Local absolute paths: ``/srv/git/repo.git``

Normalisation lower-cases the host, drops credentials and scheme-default
ports, percent-decodes the path, collapses repeated slashes and strips
leading/trailing slashes and a trailing ``.git``.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlsplit

NETWORK = "network"
LOCAL = "local"

# scheme -> (transport family, default port)
SCHEMES = {
    "http": (NETWORK, 80),
    "https": (NETWORK, 443),
    "ssh": (NETWORK, 22),
    "git+ssh": (NETWORK, 22),
    "ssh+git": (NETWORK, 22),
    "git": (NETWORK, 9418),
    "file": (LOCAL, None),
}

_SCP_LIKE = re.compile(r"^(?:(?P<user>[^@/\s]+)@)?(?P<host>[^@/:\s]+):(?P<path>[^\s]+)$")


@dataclass(frozen=True)
class RemoteURI:
    """A parsed remote location reduced to the fields that identify a repository."""

    scheme: str
    host: str
    port: Optional[int]
    path: str

    @property
    def family(self) -> str:
        return SCHEMES[self.scheme][0]

    def identity(self) -> tuple:
        """Fields compared when deciding whether two remotes are the same."""
        return (self.family, self.host, self.port, self.path)

    def __str__(self) -> str:
        if self.family == LOCAL:
            return f"file:///{self.path}"
        port = f":{self.port}" if self.port else ""
        return f"{self.host}{port}/{self.path}"


def _normalize_path(path: str) -> str:
    path = unquote(path)
    path = re.sub(r"/+", "/", path).strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")].rstrip("/")
    return path


def _build(scheme: str, host: Optional[str], port: Optional[int], path: str) -> Optional[RemoteURI]:
    family, default_port = SCHEMES[scheme]
    host = (host or "").lower()
    path = _normalize_path(path)

    if family == NETWORK and not host:
        return None
    if family == LOCAL:
        # file://localhost/x and file:///x name the same directory
        host = ""
        port = None
    if not path:
        return None
    if port == default_port:
        port = None

    return RemoteURI(scheme=scheme, host=host, port=port, path=path)


def parse_remote_uri(raw: Optional[str]) -> Optional[RemoteURI]:
    """Parse a remote URI in any supported form.

    Args:
        raw: URI as configured on a job or received in an event

    Returns:
        RemoteURI, or None when the input is empty or malformed
    """
    if not raw or not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None

    if "://" in text:
        try:
            parts = urlsplit(text)
            port = parts.port
        except ValueError:
            return None
        scheme = parts.scheme.lower()
        if scheme not in SCHEMES:
            return None
        return _build(scheme, parts.hostname, port, parts.path)

    if text.startswith("/"):
        return _build("file", None, None, text)

    match = _SCP_LIKE.match(text)
    if match:
        return _build("ssh", match.group("host"), None, match.group("path"))

    return None


def normalize_remote_uri(raw: Optional[str]) -> Optional[str]:
    """Canonical string form of a remote URI, or None if it cannot be parsed.

    Example:
        >>> normalize_remote_uri("https://user:pw@Example.com/Org/Repo.git/")
        'example.com/Org/Repo'
        >>> normalize_remote_uri("git@example.com:Org/Repo.git")
        'example.com/Org/Repo'
    """
    parsed = parse_remote_uri(raw)
    return str(parsed) if parsed else None
