"""Pydantic models for the job YAML schema consumed by ``boxrun run``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from boxrun.utils.telemetry import TelemetrySettings

__all__ = ["JobSpec", "TelemetrySettings"]


class JobSpec(BaseModel):
    """Top-level job specification parsed from YAML."""

    version: str = "1"
    name: str = ""
    image: str
    args: list[str] = []
    input_dir: str
    output_dir: str
    env: dict[str, str] = Field(default_factory=dict)
    working_dir: str | None = None
    pull: bool = True
    pull_options: dict[str, Any] = Field(default_factory=dict)
    strict_exit: bool = False
    auto_remove: bool = True
    docker_binary: str = "docker"
    telemetry: TelemetrySettings | None = None

    @field_validator("image")
    @classmethod
    def _validate_image(cls, value: str) -> str:
        if not value.strip():
            msg = "image must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("env", mode="before")
    @classmethod
    def _stringify_env(cls, value: Any) -> Any:
        # YAML turns unquoted numbers and booleans into non-strings
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value
