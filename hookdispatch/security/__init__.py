"""Identity handling for registry access."""

from .privilege import (
    ANONYMOUS,
    SYSTEM,
    Identity,
    current_identity,
    elevated_identity,
    with_elevated_identity,
)

__all__ = [
    "Identity",
    "ANONYMOUS",
    "SYSTEM",
    "current_identity",
    "elevated_identity",
    "with_elevated_identity",
]
