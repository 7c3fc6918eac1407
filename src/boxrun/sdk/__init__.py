"""boxrun SDK: programmatic interface for loading and running job files."""

from boxrun.sdk.errors import JobValidationError
from boxrun.sdk.job import JobLoader, JobRunner
from boxrun.sdk.models import JobSpec, TelemetrySettings

__all__ = [
    "JobLoader",
    "JobRunner",
    "JobSpec",
    "JobValidationError",
    "TelemetrySettings",
]
