"""CLI interface for snapzap."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from snapzap import __version__
from snapzap.config import get_settings
from snapzap.display import console, show_internal_error, show_no_snapshots, show_snapshot_list
from snapzap.exceptions import (
    ExternalToolError,
    InternalConsistencyError,
    UsageError,
    VolumeNotFound,
)
from snapzap.logging_config import get_logger, setup_logging
from snapzap.menu import MenuSession
from snapzap.snapshots import is_time_machine_volume, list_snapshots

logger = get_logger(__name__)

EPILOG = """
Minimal required argument is -v which will then give you a menu of options.

Examples:

  snapzap -v /Volumes/MyVolume --list   (just lists the snapshots and exits)

  snapzap -v MyVolume                   (shows a menu of options)

  snapzap -v MyVolume --purge-all       (purges all snapshots after you confirm)

Typing '/Volumes/' before the volume name is optional as long as the volume exists in /Volumes.
"""

app = typer.Typer(
    name="snapzap",
    help="snapzap helps you clean up snapshots on APFS volumes in macOS.",
    epilog=EPILOG,
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"snapzap version {__version__}")
        raise typer.Exit()


def resolve_volume_path(volume: str, mount_root: str) -> str:
    """
    Turn a volume argument into a mount path.

    Args:
        volume: Volume name or path as typed by the user
        mount_root: Root under which volumes are mounted (e.g. /Volumes/)

    Returns:
        The path unchanged if it already contains the mount root, otherwise
        the path under the mount root
    """
    if mount_root.lower() in volume.lower():
        return volume
    return mount_root + volume.lstrip("/")


def check_mode_flags(volume: Optional[str], list_only: bool, purge_all: bool) -> None:
    """Raise UsageError if a mode flag is given without a volume."""
    if volume is not None:
        return
    if list_only:
        raise UsageError("You must pass in a volume name (-v) with the --list argument")
    if purge_all:
        raise UsageError("You must pass in a volume name (-v) with the --purge-all argument")


def run(volume: str, list_only: bool, purge_all: bool) -> int:
    """Run the requested mode against a volume and return the exit code."""
    volume_path = resolve_volume_path(volume, get_settings().mount_root)
    if not Path(volume_path).exists():
        raise VolumeNotFound(volume_path)

    index = list_snapshots(volume_path)
    if not index:
        show_no_snapshots(volume_path)
        return 0

    if list_only:
        show_snapshot_list(index)
        return 0

    session = MenuSession(
        volume_path=volume_path,
        console=console,
        index=index,
        time_machine=is_time_machine_volume(volume_path),
    )
    if purge_all:
        return session.purge_all()

    session.run()
    return 0


@app.command()
def main(
    ctx: typer.Context,
    volume: Optional[str] = typer.Option(
        None,
        "--volume",
        "-v",
        metavar="PATH",
        help="Volume (ex: -v /Volumes/Name)",
    ),
    list_only: bool = typer.Option(
        False,
        "--list",
        "-l",
        help="List snapshots and exit (ex: -v /Volumes/Name -l)",
    ),
    purge_all: bool = typer.Option(
        False,
        "--purge-all",
        "--purgeAll",
        "-p",
        help="Purge ALL snapshots after confirmation",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """List and purge APFS snapshots on a volume."""
    setup_logging()

    if volume is None and not list_only and not purge_all:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    try:
        check_mode_flags(volume, list_only, purge_all)
        code = run(volume, list_only, purge_all)
    except (UsageError, VolumeNotFound, ExternalToolError) as e:
        logger.debug("Exiting on error: %s", e)
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except InternalConsistencyError as e:
        logger.error("%s", e)
        show_internal_error(str(e))
        raise typer.Exit(1)

    raise typer.Exit(code)


if __name__ == "__main__":
    app()
