"""Data models exchanged with container engine clients."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

CONTAINER_INPUT_DIR = "/input"
CONTAINER_OUTPUT_DIR = "/output"


class RunConfig(BaseModel):
    """Per-invocation container configuration passed to ``EngineClient.run``."""

    binds: list[str] = Field(default_factory=list, description="host:container bind pairs.")
    volumes: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Mount points declared on the container."
    )
    user: str | None = Field(default=None, description="'<uid>:<gid>' run identity.")
    env: list[str] = Field(default_factory=list, description="KEY=VALUE environment entries.")
    working_dir: str | None = Field(default=None, description="Working directory inside the container.")
    auto_remove: bool = Field(default=True, description="Remove the container once it exits.")

    def to_engine_dict(self) -> dict[str, Any]:
        """Render the Docker Engine API create-body shape.

        Optional keys are left out entirely when unset, so the engine falls
        back to its own defaults (e.g. the image's user).
        """
        body: dict[str, Any] = {
            "Volumes": {path: dict(opts) for path, opts in self.volumes.items()},
            "HostConfig": {"Binds": list(self.binds), "AutoRemove": self.auto_remove},
        }
        if self.user is not None:
            body["User"] = self.user
        if self.env:
            body["Env"] = list(self.env)
        if self.working_dir is not None:
            body["WorkingDir"] = self.working_dir
        return body


class ContainerResult(BaseModel):
    """Terminal state reported by the engine once the container has exited."""

    status_code: int = Field(..., description="Container exit code.")
    error: str | None = Field(default=None, description="Error reported for the in-container command.")
