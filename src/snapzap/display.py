"""Rich terminal display for snapzap."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from snapzap.models import CommandResult, Snapshot, SnapshotIndex

console = Console()

ISSUES_URL = "https://github.com/EasyG0ing1/SnapZap/issues"


def purgeable_label(purgeable: bool) -> str:
    """Get styled label for the purgeable flag."""
    return "[green]Yes[/green]" if purgeable else "[red]No[/red]"


def show_snapshot_list(index: SnapshotIndex) -> None:
    """Display every snapshot in the index."""
    table = Table(title="Snapshots", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("UUID")
    table.add_column("XID", justify="right")
    table.add_column("Purgeable")
    table.add_column("Disk")

    for seq, snapshot in index.items():
        name = escape(snapshot.name) if snapshot.name else "[dim](unnamed)[/dim]"
        if snapshot.space_reserving:
            name += " [yellow]*[/yellow]"
        table.add_row(
            str(seq),
            name,
            snapshot.uuid,
            snapshot.xid,
            purgeable_label(snapshot.purgeable),
            escape(snapshot.disk),
        )

    console.print(table)

    if any(s.space_reserving for s in index.values()):
        console.print()
        console.print(
            Panel(
                "Your snapshot list contains a snapshot ([yellow]*[/yellow]) that limits the "
                "minimum size of the APFS Container.\n"
                "In terms of recovering as much space as possible on your drive, this should "
                "be the first snapshot that you delete.\n\n"
                "Using the [bold]--purge-all[/bold] option will do this for you automatically.",
                title="[bold yellow]Space Reserving Snapshot[/bold yellow]",
                border_style="yellow",
            )
        )


def show_no_snapshots(volume_path: str) -> None:
    """Tell the user the volume has nothing to purge."""
    console.print(f"\n{escape(volume_path)} does not have any snapshots")


def show_not_purgeable(snapshot: Snapshot) -> None:
    """Display the refusal for a snapshot APFS will not let go of."""
    console.print(f"The snapshot:\n\t{escape(snapshot.name)}\n[yellow]Is not purgeable[/yellow]")


def show_purge_result(snapshot: Snapshot, result: CommandResult) -> None:
    """Display the outcome of a deleteSnapshot run."""
    console.print(f"Disk: {escape(snapshot.disk)} ****")
    console.print("Ran:")
    console.print(f"\t{result.command_line}", markup=False)
    if result.ok:
        console.print()
        console.print(result.stdout, markup=False)
        console.print("[bold green]SUCCESS![/bold green]")
    else:
        console.print(f"\n[red]Error deleting snapshot: {escape(snapshot.name)}[/red]\n")
        console.print(result.stderr, markup=False)


def show_purge_all_result(success: bool) -> None:
    """Display the aggregate result of purging every snapshot."""
    if success:
        console.print("\n\n[bold green]All snapshots were deleted![/bold green]\n")
    else:
        console.print(
            "[red]One or more snapshots failed to be deleted, "
            "re-check the volume and try again.[/red]"
        )


def show_purge_cancelled() -> None:
    """Display that nothing was deleted."""
    console.print("\n[yellow]No snapshots were deleted[/yellow]\n")


def show_internal_error(message: str) -> None:
    """Display an internal consistency failure."""
    console.print(f"[bold red]{escape(message)}[/bold red]")
    console.print(f"Open an Issue at {ISSUES_URL}\n")


def show_time_machine_caution(volume_path: str) -> None:
    """Display the extended Time Machine caution."""
    console.print(
        Panel(
            f"[bold]{escape(volume_path)}[/bold] is a Time Machine backup destination.\n\n"
            "The snapshots on a Time Machine volume are your backups. Deleting them "
            "removes the backed-up history they hold, and for files that no longer "
            "exist anywhere else they may be the only copy.\n\n"
            "Before purging:\n"
            "  1. Make sure you have another backup of anything you still need.\n"
            "  2. Prefer removing single old snapshots over purging everything.\n"
            "  3. Consider letting Time Machine thin its own backups as space runs low.\n\n"
            "Snapshots deleted here cannot be recovered.",
            title="[bold red]Time Machine Volume[/bold red]",
            border_style="red",
        )
    )
