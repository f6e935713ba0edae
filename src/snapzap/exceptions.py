"""Exceptions raised by snapzap."""


class SnapzapError(Exception):
    """Base class for snapzap errors."""


class UsageError(SnapzapError):
    """Missing or invalid command-line arguments."""


class VolumeNotFound(SnapzapError):
    """The requested volume path does not exist."""

    def __init__(self, volume_path: str):
        self.volume_path = volume_path
        super().__init__(f"Volume does not exist: {volume_path}")


class ExternalToolError(SnapzapError):
    """An external command could not be run at all."""

    def __init__(self, command: list[str], reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Could not run '{' '.join(command)}': {reason}")


class InternalConsistencyError(SnapzapError):
    """The purge-all descent found a gap in the snapshot index."""

    def __init__(self, missing_index: int, index_size: int):
        self.missing_index = missing_index
        self.index_size = index_size
        super().__init__(
            f"There was a missing snapshot at index: {missing_index} "
            f"(the index size is: {index_size})"
        )
