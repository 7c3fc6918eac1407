"""``boxrun ping``: check that the container engine is reachable."""

from __future__ import annotations

import asyncio
import sys

import click

from boxrun.cli_commands._output import console, print_error


@click.command()
@click.option("--docker-binary", default="docker", show_default=True, help="docker CLI to use.")
def ping(docker_binary: str) -> None:
    """Ping the container engine."""
    from boxrun.runtime.models import RunnerSettings
    from boxrun.runtime.runner import ContainerRunner

    runner = ContainerRunner(settings=RunnerSettings(docker_binary=docker_binary))

    try:
        asyncio.run(runner.ping())
    except Exception as exc:
        print_error("Engine error", exc)
        sys.exit(1)

    console.print("[green]Container engine is available.[/green]")
