"""Shared CLI output formatters."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from boxrun.sdk.models import JobSpec  # noqa: TC001

console = Console()


def configure_logging(verbose: bool) -> None:
    """Send debug logs to stderr when *verbose* is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def print_job(spec: JobSpec) -> None:
    """Pretty-print a job specification as a table."""
    table = Table(title=f"Job {spec.name}" if spec.name else "Job")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("image", spec.image)
    table.add_row("args", _truncate(" ".join(spec.args)) or "-")
    table.add_row("input", spec.input_dir)
    table.add_row("output", spec.output_dir)
    table.add_row("pull", "yes" if spec.pull else "no")
    if spec.env:
        table.add_row("env", ", ".join(sorted(spec.env)))
    if spec.working_dir:
        table.add_row("workdir", spec.working_dir)

    console.print(table)


def print_error(label: str, exc: BaseException) -> None:
    """Print *exc* on one line; engine messages may contain ``[...]``."""
    console.print(f"[red]{label}:[/red] {escape(str(exc))}", soft_wrap=True)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
