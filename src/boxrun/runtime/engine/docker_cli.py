"""DockerCLIClient: drives the Docker engine through the ``docker`` CLI.

Uses the ``docker`` binary via asyncio subprocesses (no docker-py
dependency).  Satisfies the :class:`~boxrun.runtime.engine.client.EngineClient`
protocol:

1. ``ping()`` runs ``docker version`` against the server.
2. ``pull()`` runs ``docker pull`` and yields its progress output.
3. ``run()`` runs ``docker run`` and copies the combined output into the
   caller's sink until the container exits.
"""

from __future__ import annotations

import asyncio
import logging
from typing import IO, TYPE_CHECKING, Any

from boxrun.runtime.engine.models import ContainerResult, RunConfig
from boxrun.runtime.errors import EngineError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024
_TAIL_SIZE = 4 * 1024

# ``docker run`` reserves these exit codes for its own failures.
_RC_DOCKER_FAILED = 125
_RC_NOT_EXECUTABLE = 126
_RC_NOT_FOUND = 127

_BIND_MODES = frozenset({"ro", "rw", "z", "Z"})


class DockerCLIClient:
    """Container engine client backed by the ``docker`` command line."""

    def __init__(self, docker_binary: str = "docker") -> None:
        self._docker = docker_binary

    async def ping(self) -> None:
        """Check that the docker daemon answers."""
        output = await self._run_docker(
            [self._docker, "version", "--format", "{{.Server.Version}}"],
        )
        logger.debug("docker server version %s", output.stdout)

    async def pull(self, image: str, options: dict[str, Any]) -> AsyncIterator[bytes]:
        """Run ``docker pull`` and yield its progress lines."""
        cmd = [self._docker, "pull", *_option_flags(options), image]
        proc = await self._spawn(cmd, stderr=asyncio.subprocess.PIPE)
        assert proc.stdout is not None
        assert proc.stderr is not None
        stderr_task = asyncio.ensure_future(proc.stderr.read())

        try:
            async for line in proc.stdout:
                yield line
            stderr_bytes = await stderr_task
            returncode = await proc.wait()
        finally:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()
            if not stderr_task.done():
                stderr_task.cancel()

        if returncode != 0:
            stderr = stderr_bytes.decode(errors="replace").strip()
            raise EngineError(f"docker pull failed (rc={returncode}): {stderr}")

    async def run(
        self,
        image: str,
        args: list[str],
        output: IO[bytes],
        config: RunConfig,
    ) -> ContainerResult:
        """Run a container to completion, streaming its output into *output*."""
        cmd = self._build_run_command(image, args, config)
        proc = await self._spawn(cmd, stderr=asyncio.subprocess.STDOUT)
        assert proc.stdout is not None

        # Sinks only have to provide write()
        flush = getattr(output, "flush", None)
        tail = bytearray()
        try:
            while True:
                chunk = await proc.stdout.read(_CHUNK_SIZE)
                if not chunk:
                    break
                output.write(chunk)
                if flush is not None:
                    flush()
                tail.extend(chunk)
                del tail[:-_TAIL_SIZE]

            returncode = await proc.wait()
        finally:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()

        message = tail.decode(errors="replace").strip()

        if returncode == _RC_DOCKER_FAILED:
            raise EngineError(f"docker run failed (rc={returncode}): {message}")

        if returncode in (_RC_NOT_EXECUTABLE, _RC_NOT_FOUND):
            return ContainerResult(
                status_code=returncode,
                error=message or f"command {args[:1]} could not be invoked",
            )

        return ContainerResult(status_code=returncode)

    def _build_run_command(self, image: str, args: list[str], config: RunConfig) -> list[str]:
        """Build the ``docker run`` command line for *config*."""
        cmd: list[str] = [self._docker, "run"]

        if config.auto_remove:
            cmd.append("--rm")

        bound: set[str] = set()
        for bind in config.binds:
            cmd.extend(["--volume", bind])
            bound.add(_bind_target(bind))

        # Declared mount points without a bind become anonymous volumes
        for path in config.volumes:
            if path not in bound:
                cmd.extend(["--volume", path])

        if config.user is not None:
            cmd.extend(["--user", config.user])

        for entry in config.env:
            cmd.extend(["--env", entry])

        if config.working_dir is not None:
            cmd.extend(["--workdir", config.working_dir])

        cmd.append(image)
        cmd.extend(args)
        return cmd

    @staticmethod
    async def _spawn(cmd: list[str], *, stderr: int) -> asyncio.subprocess.Process:
        logger.debug("exec: %s", cmd)
        try:
            return await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=stderr,
            )
        except OSError as exc:
            raise EngineError(f"Failed to run docker: {exc}") from exc

    @classmethod
    async def _run_docker(cls, cmd: list[str]) -> _DockerOutput:
        """Run a short docker CLI command and return its output."""
        proc = await cls._spawn(cmd, stderr=asyncio.subprocess.PIPE)
        stdout_bytes, stderr_bytes = await proc.communicate()

        stdout = stdout_bytes.decode(errors="replace").strip() if stdout_bytes else ""
        stderr = stderr_bytes.decode(errors="replace").strip() if stderr_bytes else ""

        if proc.returncode != 0:
            raise EngineError(f"docker command failed (rc={proc.returncode}): {stderr or stdout}")

        return _DockerOutput(stdout=stdout, stderr=stderr)


class _DockerOutput:
    """Simple container for docker CLI output."""

    __slots__ = ("stdout", "stderr")

    def __init__(self, stdout: str = "", stderr: str = "") -> None:
        self.stdout = stdout
        self.stderr = stderr


def _option_flags(options: dict[str, Any]) -> list[str]:
    """Translate pull options into ``--key value`` CLI flags.

    ``True`` becomes a bare flag; ``False`` and ``None`` are dropped.
    """
    flags: list[str] = []
    for key, value in options.items():
        flag = "--" + key.replace("_", "-")
        if value is True:
            flags.append(flag)
        elif value is False or value is None:
            continue
        else:
            flags.extend([flag, str(value)])
    return flags


def _bind_target(bind: str) -> str:
    """Return the in-container path of a ``host:container[:mode]`` bind."""
    parts = bind.split(":")
    if len(parts) >= 3 and parts[-1] in _BIND_MODES:
        return parts[-2]
    return parts[-1]
