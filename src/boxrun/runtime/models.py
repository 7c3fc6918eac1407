"""Data models for container jobs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContainerJob(BaseModel):
    """A single command to execute in an ephemeral container."""

    model_config = ConfigDict(frozen=True)

    image: str = Field(..., min_length=1, description="Image to run.")
    args: list[str] = Field(default_factory=list, description="Command and arguments, passed verbatim.")
    input_dir: Path = Field(..., description="Host directory bound to /input.")
    output_dir: Path = Field(..., description="Host directory bound to /output.")
    log_sink: Any = Field(
        default=None,
        description="Object with write(bytes) receiving container output; flush() is called when present.",
    )
    pull_options: dict[str, Any] = Field(default_factory=dict, description="Passed through to the engine pull.")
    env: dict[str, str] = Field(default_factory=dict, description="Extra environment variables.")
    working_dir: str | None = Field(default=None, description="Working directory inside the container.")
    pull: bool = Field(default=True, description="Pull the image before running.")

    @field_validator("log_sink")
    @classmethod
    def _check_sink(cls, value: Any) -> Any:
        if value is not None and not callable(getattr(value, "write", None)):
            msg = "log_sink must be a writable byte stream"
            raise ValueError(msg)
        return value


class RunnerSettings(BaseModel):
    """Configuration for a :class:`~boxrun.runtime.runner.ContainerRunner`."""

    strict_exit: bool = Field(
        default=False, description="Fail on a non-zero exit code even when no error is reported."
    )
    auto_remove: bool = Field(default=True, description="Remove containers once they exit.")
    docker_binary: str = Field(default="docker", description="docker CLI used by the default engine client.")
