"""Engine subsystem: adapters that talk to a container engine."""

from boxrun.runtime.engine.client import EngineClient
from boxrun.runtime.engine.docker_cli import DockerCLIClient
from boxrun.runtime.engine.models import (
    CONTAINER_INPUT_DIR,
    CONTAINER_OUTPUT_DIR,
    ContainerResult,
    RunConfig,
)

__all__ = [
    "CONTAINER_INPUT_DIR",
    "CONTAINER_OUTPUT_DIR",
    "ContainerResult",
    "DockerCLIClient",
    "EngineClient",
    "RunConfig",
]
