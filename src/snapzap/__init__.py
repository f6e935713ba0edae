"""snapzap - list and purge APFS snapshots on macOS volumes."""

__version__ = "1.0.0"
