"""Job loading and execution for the boxrun SDK."""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from boxrun.runtime.models import ContainerJob, RunnerSettings
from boxrun.runtime.runner import ContainerRunner
from boxrun.sdk.errors import JobValidationError
from boxrun.sdk.models import JobSpec
from boxrun.utils.telemetry import configure_telemetry

if TYPE_CHECKING:
    from boxrun.runtime.engine.client import EngineClient


class JobLoader:
    """Load and validate a job YAML file into a :class:`JobSpec`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> JobSpec:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.

        Raises:
            JobValidationError: On YAML parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise JobValidationError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise JobValidationError(f"YAML parse error: {exc}") from exc

        if not isinstance(data, dict):
            raise JobValidationError("Job YAML must be a mapping")

        try:
            return JobSpec.model_validate(data)
        except ValidationError as exc:
            raise JobValidationError(str(exc)) from exc


class JobRunner:
    """Execute a validated :class:`JobSpec`."""

    def __init__(
        self,
        spec: JobSpec,
        *,
        base_dir: Path | None = None,
        engine: EngineClient | None = None,
        log_sink: IO[bytes] | None = None,
    ) -> None:
        self.spec = spec
        self.base_dir = base_dir or Path.cwd()
        self._engine = engine
        self._log_sink = log_sink

    @classmethod
    def from_yaml(cls, path: str | Path) -> JobRunner:
        """Load a job YAML and return a ready-to-run runner."""
        p = Path(path)
        spec = JobLoader(p).load()
        return cls(spec, base_dir=p.parent)

    def build_job(self) -> ContainerJob:
        """Turn the spec into a :class:`ContainerJob`.

        Relative directories resolve against ``base_dir``.
        """
        return ContainerJob(
            image=self.spec.image,
            args=self.spec.args,
            input_dir=self.base_dir / self.spec.input_dir,
            output_dir=self.base_dir / self.spec.output_dir,
            log_sink=self._log_sink,
            pull_options=self.spec.pull_options,
            env=self.spec.env,
            working_dir=self.spec.working_dir,
            pull=self.spec.pull,
        )

    def runner_settings(self) -> RunnerSettings:
        """Runner settings taken from the job spec."""
        return RunnerSettings(
            strict_exit=self.spec.strict_exit,
            auto_remove=self.spec.auto_remove,
            docker_binary=self.spec.docker_binary,
        )

    async def run(self) -> None:
        """Configure telemetry if the job asks for it, then run the job."""
        if self.spec.telemetry is not None:
            configure_telemetry(self.spec.telemetry, service_name=self.spec.name or "boxrun")

        runner = ContainerRunner(self._engine, settings=self.runner_settings())
        await runner.run(self.build_job())
