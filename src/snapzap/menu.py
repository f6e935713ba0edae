"""Interactive menu for purging snapshots on one volume."""

import re
import time
from dataclasses import dataclass, field
from enum import Enum, auto

from rich.console import Console
from rich.markup import escape

from snapzap import display
from snapzap.config import get_settings
from snapzap.logging_config import get_logger
from snapzap.models import SnapshotIndex
from snapzap.snapshots import list_snapshots, purge, purge_all_snapshots

logger = get_logger(__name__)


class MenuState(Enum):
    """States for the menu state machine."""

    MAIN = auto()
    SINGLE_SNAPSHOT = auto()
    TERMINATED = auto()


@dataclass
class MenuSession:
    """Menu-driven session for one volume.

    All input is read through ``console.input`` so a session can be driven by
    scripted responses.
    """

    volume_path: str
    console: Console = field(default_factory=lambda: display.console)
    index: SnapshotIndex = field(default_factory=dict)
    time_machine: bool = False
    state: MenuState = MenuState.MAIN

    @property
    def volume_name(self) -> str:
        """Last path segment of the volume path."""
        return self.volume_path.rstrip("/").rsplit("/", 1)[-1] or self.volume_path

    def run(self) -> None:
        """Main menu loop. Ends on quit or when no snapshots are left."""
        while self.index and self.state != MenuState.TERMINATED:
            self._handle_state()
        if not self.index:
            self.state = MenuState.TERMINATED

    def _handle_state(self) -> None:
        if self.state == MenuState.MAIN:
            self._main_menu()
        elif self.state == MenuState.SINGLE_SNAPSHOT:
            self._single_snapshot_menu()

    # ─────────────────────────────────────────────────────────────────────────
    # Main Menu
    # ─────────────────────────────────────────────────────────────────────────

    def _main_menu(self) -> None:
        """Display and handle main menu."""
        self.console.print()
        self.console.print(
            f" There are [bold]{len(self.index)}[/bold] snapshots on volume: "
            f"[bold]{escape(self.volume_name)}[/bold]"
        )
        if self.time_machine:
            self.console.print(" [bold red]This volume is a Time Machine backup destination[/bold red]")
        self.console.print()
        self.console.print(" 1) List Snapshots")
        self.console.print(" 2) Purge One Snapshot")
        self.console.print(" 3) Purge All Snapshots")
        if self.time_machine:
            self.console.print(" 4) [red]Read this before purging Time Machine snapshots[/red]")
        self.console.print(" Q) Quit")

        choice = self.console.input("\n Choice: ")

        if choice in ("Q", "q"):
            self.state = MenuState.TERMINATED
        elif choice == "1":
            self.show_full_list()
        elif choice == "2":
            self.state = MenuState.SINGLE_SNAPSHOT
        elif choice == "3":
            self.purge_all()
            self.index = list_snapshots(self.volume_path)
        elif choice == "4" and self.time_machine:
            display.show_time_machine_caution(self.volume_path)
            self._pause()
        else:
            self.console.print("\n[yellow]Invalid Choice[/yellow]\n")

    def show_full_list(self) -> None:
        """Refresh the listing from the system and display it."""
        self.index = list_snapshots(self.volume_path)
        display.show_snapshot_list(self.index)

    # ─────────────────────────────────────────────────────────────────────────
    # Single Snapshot Menu
    # ─────────────────────────────────────────────────────────────────────────

    def _single_snapshot_menu(self) -> None:
        """Display the numbered snapshot list and purge the chosen one."""
        self.console.print()
        for seq, snapshot in self.index.items():
            self.console.print(f"{seq}) {snapshot.name}", markup=False)
        self.console.print("\n0) Main Menu\n")

        digits = re.sub(r"[^0-9]+", "", self.console.input("Choice: "))
        option = int(digits) if digits else 0

        if option == 0:
            self.state = MenuState.MAIN
            return

        snapshot = self.index.get(option)
        if snapshot is None:
            self.console.print("[yellow]Invalid choice[/yellow]")
            time.sleep(get_settings().invalid_choice_pause)
            return

        if purge(snapshot):
            del self.index[option]
        self.console.input("\n<Press Enter>")

        if not self.index:
            self.state = MenuState.MAIN

    # ─────────────────────────────────────────────────────────────────────────
    # Purge All
    # ─────────────────────────────────────────────────────────────────────────

    def confirm_purge_all(self) -> bool:
        """Ask the user to confirm deleting every snapshot.

        Time Machine volumes need two answers of exactly ``Y``. Other volumes
        need one answer and only an exact ``N``/``n`` declines it.
        """
        count = len(self.index)
        if self.time_machine:
            self.console.print(
                f"\n[bold red]WARNING: {escape(self.volume_path)} is a TIME MACHINE backup volume!\n"
                f"This will DELETE all {count} snapshots on it, and with them your backups.[/bold red]\n"
            )
            if self.console.input("Are you sure you want to proceed (Y/N)? ") != "Y":
                return False
            return self.console.input("\nAre you 100% sure? (Y/N)? ") == "Y"

        self.console.print(
            f"\n[bold yellow]WARNING:[/bold yellow] This will DELETE all {count} snapshots "
            f"on volume: {escape(self.volume_path)}\n"
        )
        response = self.console.input("Are you sure you want to proceed (Y/N)? ")
        return response.lower() != "n"

    def purge_all(self) -> int:
        """Confirm, then purge every snapshot on the volume.

        Returns:
            0 on success or when the user declines, 1 if any deletion failed
        """
        if not self.confirm_purge_all():
            display.show_purge_cancelled()
            return 0

        logger.info("Purging all snapshots on %s", self.volume_path)
        success = purge_all_snapshots(self.volume_path)
        display.show_purge_all_result(success)
        return 0 if success else 1

    def _pause(self) -> None:
        """Pause for user to read output."""
        self.console.input("\n[dim]Press Enter to continue...[/dim]")

