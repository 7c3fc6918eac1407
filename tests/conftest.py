"""Shared fixtures: an in-memory engine client."""

from __future__ import annotations

from typing import IO, Any

import pytest

from boxrun.runtime.engine.models import ContainerResult, RunConfig


class FakeEngine:
    """Records calls and replays configured outcomes.

    Satisfies the :class:`~boxrun.runtime.engine.client.EngineClient` protocol.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.ping_error: Exception | None = None
        self.pull_chunks: list[bytes] = [b'{"status":"Pulling"}\n', b'{"status":"Downloaded"}\n']
        self.pull_error: Exception | None = None
        self.pull_calls: list[tuple[str, dict[str, Any]]] = []
        self.run_result = ContainerResult(status_code=0)
        self.run_error: Exception | None = None
        self.run_calls: list[tuple[str, list[str], IO[bytes], RunConfig]] = []
        self.pull_drained = False

    async def ping(self) -> None:
        self.calls.append("ping")
        if self.ping_error is not None:
            raise self.ping_error

    async def pull(self, image: str, options: dict[str, Any]):
        self.calls.append("pull")
        self.pull_calls.append((image, options))
        for chunk in self.pull_chunks:
            yield chunk
        if self.pull_error is not None:
            raise self.pull_error
        self.pull_drained = True

    async def run(
        self,
        image: str,
        args: list[str],
        output: IO[bytes],
        config: RunConfig,
    ) -> ContainerResult:
        self.calls.append("run")
        self.run_calls.append((image, args, output, config))
        if self.run_error is not None:
            raise self.run_error
        return self.run_result

    @property
    def last_config(self) -> RunConfig:
        return self.run_calls[-1][3]


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()
