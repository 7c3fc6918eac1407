"""Container runner: executes one job in an ephemeral container.

Each :func:`run_container` call:
1. Pings the engine; an unreachable engine fails fast.
2. Pulls the image, draining the pull output to its end.
3. Builds the run configuration (binds, mount points, identity, env).
4. Runs the container, streaming its output into the log sink.
5. Maps the reported result onto success or a :class:`ContainerRunError`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from boxrun.runtime.engine.docker_cli import DockerCLIClient
from boxrun.runtime.engine.models import CONTAINER_INPUT_DIR, CONTAINER_OUTPUT_DIR, RunConfig
from boxrun.runtime.errors import (
    ContainerCommandError,
    ContainerExitError,
    ContainerRunError,
    EngineRunError,
    EngineUnavailableError,
    ImagePullError,
    InvalidJobError,
)
from boxrun.runtime.identity import posix_identity
from boxrun.runtime.models import RunnerSettings
from boxrun.utils.telemetry import (
    ATTR_ARGS_COUNT,
    ATTR_IMAGE,
    ATTR_PULL_CHUNKS,
    ATTR_PULL_SKIPPED,
    ATTR_STATUS_CODE,
    ATTR_USER,
    get_tracer,
    record_error_kind,
)

if TYPE_CHECKING:
    from boxrun.runtime.engine.client import EngineClient
    from boxrun.runtime.identity import HostIdentityProvider
    from boxrun.runtime.models import ContainerJob

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

_CONTAINER_HOME = "/tmp"


async def check_engine(engine: EngineClient) -> None:
    """Ping the engine, raising :class:`EngineUnavailableError` if it does not answer."""
    with _tracer.start_as_current_span("engine.ping"):
        try:
            await engine.ping()
        except Exception as exc:
            raise EngineUnavailableError(_describe(exc)) from exc


async def acquire_image(
    engine: EngineClient,
    image: str,
    options: dict[str, Any] | None = None,
) -> None:
    """Pull *image* and wait until the pull output has ended."""
    chunks = 0
    with _tracer.start_as_current_span("image.pull") as span:
        span.set_attribute(ATTR_IMAGE, image)
        try:
            async for _chunk in engine.pull(image, dict(options or {})):
                chunks += 1
        except Exception as exc:
            raise ImagePullError(image, _describe(exc)) from exc
        span.set_attribute(ATTR_PULL_CHUNKS, chunks)

    logger.debug("Pulled %s (%d progress chunks)", image, chunks)


def build_run_config(
    job: ContainerJob,
    identity_provider: HostIdentityProvider = posix_identity,
    *,
    auto_remove: bool = True,
) -> RunConfig:
    """Derive binds, mount points and run identity for *job*."""
    input_dir = _resolve_dir(job.input_dir, "input")
    output_dir = _resolve_dir(job.output_dir, "output")

    user = identity_provider()
    env = dict(job.env)
    if user is not None:
        # An arbitrary uid usually has no home directory in the image
        env.setdefault("HOME", _CONTAINER_HOME)
    else:
        logger.debug("No host identity available; container runs as the image's default user")

    return RunConfig(
        binds=[
            f"{input_dir}:{CONTAINER_INPUT_DIR}",
            f"{output_dir}:{CONTAINER_OUTPUT_DIR}",
        ],
        volumes={CONTAINER_INPUT_DIR: {}, CONTAINER_OUTPUT_DIR: {}},
        user=user,
        env=[f"{key}={value}" for key, value in sorted(env.items())],
        working_dir=job.working_dir,
        auto_remove=auto_remove,
    )


async def run_container(
    job: ContainerJob,
    engine: EngineClient,
    *,
    identity_provider: HostIdentityProvider = posix_identity,
    strict_exit: bool = False,
    auto_remove: bool = True,
) -> None:
    """Run *job* to completion on *engine*.

    Returns ``None`` on success.  A result carrying an error fails the run
    whatever its status code; a non-zero status code without an error only
    fails when *strict_exit* is set.

    Raises:
        EngineUnavailableError: The engine did not answer the ping.
        ImagePullError: The image could not be pulled.
        InvalidJobError: A bound host directory does not exist.
        EngineRunError: The engine failed to run the container.
        ContainerCommandError: The command inside the container failed.
    """
    with _tracer.start_as_current_span("container.run") as span:
        span.set_attribute(ATTR_IMAGE, job.image)
        span.set_attribute(ATTR_ARGS_COUNT, len(job.args))

        try:
            await check_engine(engine)

            if job.pull:
                await acquire_image(engine, job.image, job.pull_options)
            else:
                span.set_attribute(ATTR_PULL_SKIPPED, True)

            config = build_run_config(job, identity_provider, auto_remove=auto_remove)
            if config.user is not None:
                span.set_attribute(ATTR_USER, config.user)

            sink: IO[bytes] = job.log_sink if job.log_sink is not None else sys.stdout.buffer

            logger.debug("Running %s with args %s", job.image, job.args)
            try:
                result = await engine.run(job.image, list(job.args), sink, config)
            except Exception as exc:
                raise EngineRunError(job.image, _describe(exc)) from exc

            span.set_attribute(ATTR_STATUS_CODE, result.status_code)

            if result.error is not None:
                raise ContainerCommandError(result.error)

            if result.status_code != 0:
                if strict_exit:
                    raise ContainerExitError(result.status_code)
                logger.warning(
                    "Container from %s exited with status %d but reported no error",
                    job.image,
                    result.status_code,
                )
        except ContainerRunError as exc:
            record_error_kind(span, exc)
            raise


class ContainerRunner:
    """Runs container jobs against one engine client with shared settings.

    The engine client is shared between concurrent ``run()`` calls and is
    never locked.
    """

    def __init__(
        self,
        engine: EngineClient | None = None,
        *,
        settings: RunnerSettings | None = None,
        identity_provider: HostIdentityProvider = posix_identity,
        log_sink: IO[bytes] | None = None,
    ) -> None:
        self._settings = settings or RunnerSettings()
        self._engine = engine or DockerCLIClient(self._settings.docker_binary)
        self._identity_provider = identity_provider
        self._log_sink = log_sink

    @property
    def engine(self) -> EngineClient:
        return self._engine

    @property
    def settings(self) -> RunnerSettings:
        return self._settings

    async def ping(self) -> None:
        """Check that the engine is reachable."""
        await check_engine(self._engine)

    async def run(self, job: ContainerJob) -> None:
        """Run *job*, using the runner's log sink when the job has none."""
        if job.log_sink is None and self._log_sink is not None:
            job = job.model_copy(update={"log_sink": self._log_sink})

        await run_container(
            job,
            self._engine,
            identity_provider=self._identity_provider,
            strict_exit=self._settings.strict_exit,
            auto_remove=self._settings.auto_remove,
        )


def _resolve_dir(path: Path, label: str) -> Path:
    try:
        resolved = Path(path).resolve(strict=True)
    except OSError as exc:
        raise InvalidJobError(f"{label} directory {path} does not exist") from exc
    if not resolved.is_dir():
        raise InvalidJobError(f"{label} directory {path} is not a directory")
    return resolved


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
