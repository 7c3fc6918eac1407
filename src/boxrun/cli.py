"""boxrun CLI entrypoint."""

from __future__ import annotations

import click

from boxrun import __version__


@click.group()
@click.version_option(version=__version__, prog_name="boxrun")
def main() -> None:
    """boxrun: run commands in ephemeral containers."""


# Register subcommands
from boxrun.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
