"""boxrun: run commands in ephemeral containers with bound input/output directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from boxrun.runtime.models import ContainerJob as ContainerJob
    from boxrun.runtime.runner import ContainerRunner as ContainerRunner
    from boxrun.runtime.runner import run_container as run_container
    from boxrun.sdk.job import JobRunner as JobRunner

_LAZY_EXPORTS = {
    "ContainerJob": "boxrun.runtime.models",
    "ContainerRunner": "boxrun.runtime.runner",
    "run_container": "boxrun.runtime.runner",
    "JobRunner": "boxrun.sdk.job",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'boxrun' has no attribute {name!r}")
