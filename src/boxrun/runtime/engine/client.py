"""EngineClient protocol: the common interface for container engine adapters."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from boxrun.runtime.engine.models import ContainerResult, RunConfig


@runtime_checkable
class EngineClient(Protocol):
    """Talks to a container engine on behalf of the runner.

    Implementations must provide ``ping()`` for availability checks,
    ``pull()`` for image acquisition and ``run()`` for executing a single
    container to completion.  Clients may be shared between concurrent
    runs; the runner never locks them.
    """

    async def ping(self) -> None:
        """Return when the engine is reachable, raise otherwise."""
        ...

    def pull(self, image: str, options: dict[str, Any]) -> AsyncIterator[bytes]:
        """Pull *image*, yielding raw progress output until the pull ends.

        Errors are raised from the iterator.
        """
        ...

    async def run(
        self,
        image: str,
        args: list[str],
        output: IO[bytes],
        config: RunConfig,
    ) -> ContainerResult:
        """Run *image* with *args*, writing its output to *output*, and wait for exit."""
        ...
