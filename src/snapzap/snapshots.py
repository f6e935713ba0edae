"""Snapshot listing and purging for snapzap."""

import time

from snapzap.commands import (
    delete_snapshot_command,
    destination_info_command,
    list_snapshots_command,
    run_command,
)
from snapzap.config import get_settings
from snapzap.display import show_not_purgeable, show_purge_result
from snapzap.exceptions import InternalConsistencyError
from snapzap.logging_config import get_logger
from snapzap.models import Snapshot, SnapshotIndex
from snapzap.parser import extract_mount_points, parse_snapshots

logger = get_logger(__name__)


def list_snapshots(volume_path: str) -> SnapshotIndex:
    """
    List the snapshots on a volume.

    The listing is re-read from diskutil on every call. Its output is parsed
    even when diskutil exits non-zero.

    Args:
        volume_path: Mounted volume path (e.g. /Volumes/Backup)

    Returns:
        Mapping of 1-based sequence number to Snapshot; empty if there are none

    Raises:
        ExternalToolError: If diskutil could not be run
    """
    result = run_command(list_snapshots_command(volume_path))
    index = parse_snapshots(result.output)
    logger.debug("Found %d snapshot(s) on %s", len(index), volume_path)
    return index


def has_snapshots(volume_path: str) -> bool:
    """Whether the volume currently has any snapshots."""
    return bool(list_snapshots(volume_path))


def is_time_machine_volume(volume_path: str) -> bool:
    """Whether the exact volume path is a Time Machine destination mount point."""
    result = run_command(destination_info_command())
    return volume_path in extract_mount_points(result.stdout)


def purge(snapshot: Snapshot) -> bool:
    """
    Delete a single snapshot.

    Snapshots that are not purgeable are refused without running anything.

    Args:
        snapshot: Snapshot to delete

    Returns:
        True if diskutil deleted the snapshot
    """
    if not snapshot.purgeable:
        show_not_purgeable(snapshot)
        time.sleep(get_settings().not_purgeable_pause)
        return False

    result = run_command(delete_snapshot_command(snapshot.disk, snapshot.xid))
    show_purge_result(snapshot, result)
    if not result.ok:
        logger.warning(
            "Deleting snapshot %s (xid %s) failed with exit code %d",
            snapshot.name,
            snapshot.xid,
            result.returncode,
        )
        return False
    return True


def purge_all_snapshots(volume_path: str) -> bool:
    """
    Delete every snapshot on a volume.

    A space-reserving snapshot goes first, since it pins the container's
    minimum size. The rest are deleted from the highest sequence number down
    to 1. Failures do not stop the run.

    Args:
        volume_path: Mounted volume path

    Returns:
        True only if every attempted deletion succeeded

    Raises:
        InternalConsistencyError: If a sequence number is missing from the index
        ExternalToolError: If diskutil could not be run
    """
    index = list_snapshots(volume_path)
    size = len(index)
    success = True

    reserving = min((seq for seq, s in index.items() if s.space_reserving), default=None)
    if reserving is not None:
        logger.info("Purging space reserving snapshot #%d first", reserving)
        if purge(index[reserving]):
            del index[reserving]
        else:
            success = False

    for seq in range(size, 0, -1):
        if seq == reserving:
            continue
        snapshot = index.get(seq)
        if snapshot is None:
            raise InternalConsistencyError(seq, size)
        if not purge(snapshot):
            success = False

    return success
