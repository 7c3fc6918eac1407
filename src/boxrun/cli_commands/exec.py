"""``boxrun exec``: run an ad-hoc command in a container."""

from __future__ import annotations

import asyncio
import sys
from typing import Any

import click
from rich.markup import escape

from boxrun.cli_commands._output import configure_logging, console, print_error


def _parse_env(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    env: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        env[key] = value
    return env


def _parse_pull_options(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, Any]:
    # A bare KEY turns into a flag without a value, e.g. --quiet
    options: dict[str, Any] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not key:
            raise click.BadParameter(f"expected KEY=VALUE or KEY, got {item!r}")
        options[key] = value if sep else True
    return options


@click.command(
    "exec",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.argument("image")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--input", "-i", "input_dir", required=True,
    type=click.Path(exists=True, file_okay=False), help="Host directory bound to /input.",
)
@click.option(
    "--output", "-o", "output_dir", required=True,
    type=click.Path(exists=True, file_okay=False), help="Host directory bound to /output.",
)
@click.option("--env", "-e", "env", multiple=True, callback=_parse_env, help="KEY=VALUE, repeatable.")
@click.option("--workdir", "-w", default=None, help="Working directory inside the container.")
@click.option("--no-pull", is_flag=True, help="Use the local image without pulling.")
@click.option(
    "--pull-option", "pull_options", multiple=True, callback=_parse_pull_options,
    help="KEY=VALUE passed to the image pull as --KEY VALUE, repeatable.",
)
@click.option("--strict", is_flag=True, help="Fail on any non-zero exit code.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def exec_cmd(
    image: str,
    args: tuple[str, ...],
    input_dir: str,
    output_dir: str,
    env: dict[str, str],
    workdir: str | None,
    no_pull: bool,
    pull_options: dict[str, Any],
    strict: bool,
    verbose: bool,
) -> None:
    """Run IMAGE with ARGS, binding --input and --output into the container."""
    from boxrun.runtime.models import ContainerJob, RunnerSettings
    from boxrun.runtime.runner import ContainerRunner

    configure_logging(verbose)

    job = ContainerJob(
        image=image,
        args=list(args),
        input_dir=input_dir,
        output_dir=output_dir,
        env=env,
        working_dir=workdir,
        pull=not no_pull,
        pull_options=pull_options,
    )

    if verbose:
        console.print(escape(f"Running {image} {' '.join(args)}"))

    runner = ContainerRunner(settings=RunnerSettings(strict_exit=strict))

    try:
        asyncio.run(runner.run(job))
    except Exception as exc:
        print_error("Execution error", exc)
        sys.exit(1)
