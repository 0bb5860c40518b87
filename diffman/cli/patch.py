"""CLI commands for applying and reverting a diff file."""

from pathlib import Path
from typing import Callable, Optional

import typer

from diffman import manager
from diffman.cli.utils import load_settings, read_diff_file
from diffman.diff.composition import LocalFileIO
from diffman.diff.exceptions import DiffmanError


DIFF_OPTION = typer.Option(
    ...,
    "--diff",
    "-d",
    help="Path to the git unified diff file",
)
TARGET_OPTION = typer.Option(
    ...,
    "--target",
    "-t",
    help="Root directory the diff paths are relative to",
)
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Config file to use instead of ~/.diffman/config.yaml",
)
VERBOSE_OPTION = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Show debug log output",
)


def _run(
    operation: Callable,
    verb: str,
    diff_path: Path,
    target_root: Path,
    config_path: Optional[Path],
    verbose: bool,
) -> None:
    try:
        config = load_settings(config_path, verbose)
        composition = manager.parse(read_diff_file(diff_path))
        written = operation(
            composition, target_root, LocalFileIO(encoding=config.encoding)
        )
    except DiffmanError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for path in written:
        typer.echo(f"{verb} {path}")
    typer.echo(f"{verb} {len(written)} file(s).", err=True)


def apply_command(
    diff_path: Path = DIFF_OPTION,
    target_root: Path = TARGET_OPTION,
    config_path: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Apply a diff file to the files under the target root."""
    _run(manager.apply, "Applied", diff_path, target_root, config_path, verbose)


def revert_command(
    diff_path: Path = DIFF_OPTION,
    target_root: Path = TARGET_OPTION,
    config_path: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Revert a diff file from the files under the target root."""
    _run(manager.revert, "Reverted", diff_path, target_root, config_path, verbose)
