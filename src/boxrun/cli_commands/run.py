"""``boxrun run``: execute a job from a YAML file."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from rich.markup import escape

from boxrun.cli_commands._output import configure_logging, console, print_error, print_job


@click.command()
@click.argument("job", type=click.Path(exists=True, dir_okay=False))
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
@click.option("--strict", is_flag=True, help="Fail on any non-zero exit code.")
@click.option("--dry-run", is_flag=True, help="Validate the job only, do not execute.")
def run(
    job: str,
    verbose: bool,
    telemetry: bool,
    strict: bool,
    dry_run: bool,
) -> None:
    """Execute the job defined in JOB yaml file."""
    from boxrun.sdk.job import JobLoader, JobRunner

    configure_logging(verbose)
    job_path = Path(job)

    try:
        spec = JobLoader(job_path).load()
    except Exception as exc:
        print_error("Validation error", exc)
        sys.exit(1)

    if telemetry:
        if spec.telemetry is None:
            from boxrun.sdk.models import TelemetrySettings

            spec.telemetry = TelemetrySettings(enabled=True)
        else:
            spec.telemetry.enabled = True

    if strict:
        spec.strict_exit = True

    if dry_run:
        console.print("[green]Job validated successfully.[/green]")
        print_job(spec)
        return

    if verbose:
        console.print(escape(f"Running job: {spec.name or job_path.name}"))

    runner = JobRunner(spec, base_dir=job_path.parent)

    try:
        asyncio.run(runner.run())
    except Exception as exc:
        print_error("Execution error", exc)
        sys.exit(1)

    console.print("[green]Job completed successfully.[/green]")
