"""Runtime layer: engine adapters and the container runner."""

from boxrun.runtime.errors import (
    ContainerCommandError,
    ContainerExitError,
    ContainerRunError,
    EngineError,
    EngineRunError,
    EngineUnavailableError,
    ImagePullError,
    InvalidJobError,
)
from boxrun.runtime.models import ContainerJob, RunnerSettings
from boxrun.runtime.runner import (
    ContainerRunner,
    acquire_image,
    build_run_config,
    check_engine,
    run_container,
)

__all__ = [
    "ContainerCommandError",
    "ContainerExitError",
    "ContainerJob",
    "ContainerRunError",
    "ContainerRunner",
    "EngineError",
    "EngineRunError",
    "EngineUnavailableError",
    "ImagePullError",
    "InvalidJobError",
    "RunnerSettings",
    "acquire_image",
    "build_run_config",
    "check_engine",
    "run_container",
]
