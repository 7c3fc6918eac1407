"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from boxrun.cli_commands.exec import exec_cmd
    from boxrun.cli_commands.ping import ping
    from boxrun.cli_commands.run import run

    cli.add_command(run)
    cli.add_command(exec_cmd)
    cli.add_command(ping)
