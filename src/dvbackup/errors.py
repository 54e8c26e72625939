from __future__ import annotations


class VolumeBackupException(Exception):
    """Generic exception for volume backup and restore errors."""


class PathResolutionError(VolumeBackupException):
    """A path could not be resolved into a parent directory and filename."""


class ArchiveReadError(VolumeBackupException):
    """An archive could not be opened or decoded."""


class LaunchError(VolumeBackupException):
    """The container runtime executable could not be started."""


class RuntimeExitError(VolumeBackupException):
    """The container runtime exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Error in command: {' '.join(command)}\n"
            f"Exit code: {returncode}"
        )
