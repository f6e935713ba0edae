"""External command execution for snapzap."""

import subprocess

from snapzap.config import get_settings
from snapzap.exceptions import ExternalToolError
from snapzap.logging_config import get_logger
from snapzap.models import CommandResult

logger = get_logger(__name__)


def list_snapshots_command(volume_path: str) -> list[str]:
    """Command that lists the APFS snapshots of a volume."""
    return [get_settings().diskutil_command, "apfs", "listSnapshots", volume_path]


def delete_snapshot_command(disk: str, xid: str) -> list[str]:
    """Command that deletes one snapshot, addressed by disk and transaction id."""
    return [get_settings().diskutil_command, "apfs", "deleteSnapshot", disk, "-xid", xid]


def destination_info_command() -> list[str]:
    """Command that describes the configured Time Machine destinations."""
    return [get_settings().tmutil_command, "destinationinfo"]


def run_command(args: list[str]) -> CommandResult:
    """
    Run an external command and capture its output.

    A non-zero exit status is not an error here: callers decide what the
    output means.

    Args:
        args: Command and arguments

    Returns:
        CommandResult with exit code, stdout and stderr

    Raises:
        ExternalToolError: If the command could not be launched or timed out
    """
    logger.debug("Running: %s", " ".join(args))
    try:
        completed = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=get_settings().command_timeout_seconds,
        )
    except FileNotFoundError as e:
        raise ExternalToolError(args, "command not found") from e
    except PermissionError as e:
        raise ExternalToolError(args, f"permission denied: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise ExternalToolError(args, "command timed out") from e
    except OSError as e:
        raise ExternalToolError(args, f"OS error: {e}") from e

    logger.debug("Exit code %d from: %s", completed.returncode, " ".join(args))
    return CommandResult(
        args=list(args),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
