"""Parsers for diskutil and tmutil text output.

Everything that knows about the textual layout of the external tools lives
here; the rest of snapzap only sees Snapshot models.
"""

import re

from snapzap.logging_config import get_logger
from snapzap.models import Snapshot, SnapshotIndex

logger = get_logger(__name__)

SPACE_RESERVING_NOTE = "this snapshot limits the minimum size"

# Leading tree decoration on diskutil lines: spaces, tabs, ASCII and Unicode box drawing
_DECOR = r"[ \t|+`\\\-─-╿]*"

_UUID = r"[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}"

_DISK_RE = re.compile(r"^Snapshots?[ \t]+for[ \t]+(\S+)", re.MULTILINE)

_ENTRY_RE = re.compile(
    rf"^{_DECOR}(?P<uuid>{_UUID})[^\n]*\n"
    rf"^{_DECOR}Name:[ \t]*(?P<name>[^\r\n]*?)[ \t]*\r?\n"
    rf"^{_DECOR}XID:[ \t]*(?P<xid>\d+)[ \t]*\r?\n"
    rf"^{_DECOR}Purgeable:[ \t]*(?P<purgeable>(?i:yes|no))\b",
    re.MULTILINE,
)

_UUID_LINE_RE = re.compile(rf"^{_DECOR}{_UUID}", re.MULTILINE)

_MOUNT_POINT_RE = re.compile(r"^\s*Mount[ \t]+Point[ \t]*:[ \t]*(.+?)[ \t]*$", re.MULTILINE)


def parse_disk(text: str) -> str:
    """Disk identifier from the 'Snapshots for <disk>' header, or '' if absent."""
    match = _DISK_RE.search(text)
    return match.group(1) if match else ""


def parse_snapshots(text: str) -> SnapshotIndex:
    """
    Parse `diskutil apfs listSnapshots` output into a snapshot index.

    Blocks missing any of the UUID, Name, XID or Purgeable lines are skipped.
    The free text after a block, up to the next UUID line (recognised or
    not), is checked for the note diskutil prints on a snapshot that pins
    the container size.

    Args:
        text: Raw listing output

    Returns:
        Mapping of 1-based sequence number to Snapshot, in listing order
    """
    disk = parse_disk(text)
    matches = list(_ENTRY_RE.finditer(text))

    index: SnapshotIndex = {}
    for seq, match in enumerate(matches, 1):
        next_block = _UUID_LINE_RE.search(text, match.end())
        note_end = next_block.start() if next_block else len(text)
        note = text[match.end():note_end]
        index[seq] = Snapshot(
            disk=disk,
            uuid=match.group("uuid"),
            name=match.group("name").strip(),
            xid=match.group("xid"),
            purgeable=match.group("purgeable").lower() == "yes",
            space_reserving=SPACE_RESERVING_NOTE in note.lower(),
        )

    skipped = len(_UUID_LINE_RE.findall(text)) - len(matches)
    if skipped > 0:
        logger.debug("Skipped %d unrecognised snapshot block(s)", skipped)

    return index


def extract_mount_points(text: str) -> list[str]:
    """All paths from 'Mount Point: <path>' lines of `tmutil destinationinfo`."""
    return [m.group(1).strip() for m in _MOUNT_POINT_RE.finditer(text)]
