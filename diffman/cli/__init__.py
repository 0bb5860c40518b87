"""CLI entry point for diffman.

This module provides the main CLI application that combines the apply and
revert commands into a single interface.
"""

from typing import Optional

import typer

from diffman import __version__
from diffman.cli.patch import apply_command, revert_command


app = typer.Typer(
    name="diffman",
    help="diffman: apply and revert git unified diffs without git",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"diffman {__version__}")
        raise typer.Exit()


@app.callback()
def main_command(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Apply or revert a git unified diff under a directory."""


app.command("apply")(apply_command)
app.command("revert")(revert_command)
