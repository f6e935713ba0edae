"""Data models for snapzap."""

from pydantic import BaseModel, ConfigDict, Field


class Snapshot(BaseModel):
    """A single APFS snapshot as reported by diskutil."""

    model_config = ConfigDict(frozen=True)

    disk: str = Field(..., description="Disk identifier hosting the snapshot (e.g. disk3s1)")
    uuid: str = Field(..., description="Snapshot UUID in canonical form")
    name: str = Field("", description="Snapshot name, may be empty")
    xid: str = Field(..., description="Transaction id the snapshot was taken at")
    purgeable: bool = Field(False, description="Whether APFS allows the snapshot to be purged")
    space_reserving: bool = Field(
        False,
        description="Whether the snapshot limits the minimum size of the APFS container",
    )


# 1-based sequence number -> snapshot, in listing order
SnapshotIndex = dict[int, Snapshot]


class CommandResult(BaseModel):
    """Captured result of an external command."""

    args: list[str] = Field(default_factory=list, description="Command and arguments")
    returncode: int = Field(..., description="Process exit code")
    stdout: str = Field("", description="Captured standard output")
    stderr: str = Field("", description="Captured standard error")

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Standard output followed by standard error."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr

    @property
    def command_line(self) -> str:
        """The command as it would be typed in a shell."""
        return " ".join(self.args)
