"""Host identity lookup for containers that write into bound directories."""

from __future__ import annotations

import os
from collections.abc import Callable

HostIdentityProvider = Callable[[], str | None]
"""Returns ``"<uid>:<gid>"`` for the container user, or ``None`` to use the image default."""


def posix_identity() -> str | None:
    """Return the effective ``uid:gid`` of this process, or ``None`` off POSIX."""
    geteuid = getattr(os, "geteuid", None)
    getegid = getattr(os, "getegid", None)
    if geteuid is None or getegid is None:
        return None
    return f"{geteuid()}:{getegid()}"


def no_identity() -> str | None:
    """Always defer to the engine's default user."""
    return None


def fixed_identity(uid: int, gid: int) -> HostIdentityProvider:
    """Return a provider that always reports ``uid:gid``."""
    value = f"{uid}:{gid}"

    def _provider() -> str | None:
        return value

    return _provider
