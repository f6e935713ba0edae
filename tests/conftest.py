"""Shared fixtures for snapzap tests."""

import logging

import pytest

from snapzap.config import reset_settings
from snapzap.models import CommandResult, Snapshot

LISTING = """\
Snapshots for disk3s1 (3 found)
|
+-- A1B2C3D4-0000-0000-0000-000000000001
|   Name:        com.apple.TimeMachine.2024-01-01-120000.local
|   XID:         42
|   Purgeable:   Yes
|   NOTE:        This snapshot limits the minimum size of APFS Container disk3
|
+-- A1B2C3D4-0000-0000-0000-000000000002
|   Name:        com.apple.TimeMachine.2024-01-02-120000.local
|   XID:         43
|   Purgeable:   No
|
+-- A1B2C3D4-0000-0000-0000-000000000003
    Name:        com.apple.os.update-4D1F2E
    XID:         44
    Purgeable:   Yes
"""

DESTINATION_INFO = """\
====================================================
Name          : Backup
Kind          : Local
Mount Point   : /Volumes/Backup
ID            : 0F6E2D3C-1111-2222-3333-444455556666
====================================================
Name          : Archive
Kind          : Network
URL           : smb://nas.local/Archive
Mount Point   : /Volumes/Archive
ID            : 0F6E2D3C-7777-8888-9999-AAAABBBBCCCC
"""


@pytest.fixture(autouse=True)
def fresh_settings():
    """Each test reads settings from its own environment."""
    reset_settings()
    yield
    reset_settings()
    logging.getLogger().handlers.clear()


@pytest.fixture
def listing_text():
    return LISTING


@pytest.fixture
def destination_info_text():
    return DESTINATION_INFO


def make_snapshot(
    seq: int,
    purgeable: bool = True,
    space_reserving: bool = False,
    disk: str = "disk3s1",
) -> Snapshot:
    """Build a snapshot whose xid and name are derived from its sequence number."""
    return Snapshot(
        disk=disk,
        uuid=f"A1B2C3D4-0000-0000-0000-{seq:012d}",
        name=f"com.apple.TimeMachine.snap-{seq}",
        xid=str(100 + seq),
        purgeable=purgeable,
        space_reserving=space_reserving,
    )


def make_index(count: int, overrides: dict[int, dict] | None = None) -> dict[int, Snapshot]:
    """Index of `count` purgeable snapshots; overrides map seq -> make_snapshot kwargs."""
    overrides = overrides or {}
    return {seq: make_snapshot(seq, **overrides.get(seq, {})) for seq in range(1, count + 1)}


def ok_result(args=None, stdout="") -> CommandResult:
    return CommandResult(args=args or [], returncode=0, stdout=stdout)


def failed_result(args=None, stderr="Error") -> CommandResult:
    return CommandResult(args=args or [], returncode=1, stderr=stderr)
