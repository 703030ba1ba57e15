"""Call-scoped identity elevation for registry scans.

Webhook callers are usually anonymous and cannot see most jobs. A dispatch
therefore scans the registry as the SYSTEM identity. The current identity is
held in a ContextVar, so elevation on one thread (or asyncio task) is never
visible to a concurrent dispatch, and the previous identity is restored on
every exit path.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Callable, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Identity:
    """A caller identity as seen by the job registry."""

    name: str
    is_system: bool = False


ANONYMOUS = Identity(name="anonymous")
SYSTEM = Identity(name="SYSTEM", is_system=True)

_current_identity: ContextVar[Identity] = ContextVar("current_identity", default=ANONYMOUS)


def current_identity() -> Identity:
    """Identity the current context is running as."""
    return _current_identity.get()


@contextmanager
def elevated_identity(identity: Identity = SYSTEM) -> Iterator[Identity]:
    """Run a block as ``identity``, restoring the previous identity afterwards.

    Example:
        >>> with elevated_identity() as identity:
        ...     jobs = list(registry.all_jobs(identity))
    """
    token = _current_identity.set(identity)
    try:
        yield identity
    finally:
        _current_identity.reset(token)


def with_elevated_identity(fn: Callable[[Identity], T], identity: Identity = SYSTEM) -> T:
    """Call ``fn(identity)`` with ``identity`` installed as the current identity.

    The identity is passed explicitly so the callee never needs to read the
    ambient context.

    Args:
        fn: Scan closure receiving the elevated identity
        identity: Identity to run as (defaults to SYSTEM)

    Returns:
        Whatever ``fn`` returns; exceptions propagate after restoration
    """
    with elevated_identity(identity) as active:
        return fn(active)
