"""Domain types, enumerations, and event payloads for cms-dbkit.

Design notes
------------
* Enumerations use :class:`~enum.StrEnum` so values serialise to plain
  strings in logs without extra conversion.
* Event payloads and :class:`CommandResult` are Pydantic ``frozen=True``
  models, so listeners cannot mutate what other listeners receive.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ConnectionEvent(StrEnum):
    """Lifecycle events fired by :class:`~cms_dbkit.connection.Connection`.

    Events
    ------
    BEFORE_CREATE_BACKUP
        The dump command is about to run.  Payload: :class:`BackupEvent`.
    AFTER_CREATE_BACKUP
        The dump command succeeded.  Payload: :class:`BackupEvent`.
    BACKUP_FAILURE
        The dump command failed.  Payload: :class:`BackupFailureEvent`.
    BEFORE_RESTORE_BACKUP
        The restore command is about to run.  Payload: :class:`RestoreEvent`.
    AFTER_RESTORE_BACKUP
        The restore command succeeded.  Payload: :class:`RestoreEvent`.
    RESTORE_FAILURE
        The restore command failed.  Payload: :class:`RestoreFailureEvent`.
    """

    BEFORE_CREATE_BACKUP = "before_create_backup"
    AFTER_CREATE_BACKUP = "after_create_backup"
    BACKUP_FAILURE = "backup_failure"
    BEFORE_RESTORE_BACKUP = "before_restore_backup"
    AFTER_RESTORE_BACKUP = "after_restore_backup"
    RESTORE_FAILURE = "restore_failure"


# ---------------------------------------------------------------------------
# Event payloads
# ---------------------------------------------------------------------------


class BackupEvent(BaseModel):
    """Payload for the backup lifecycle events.

    Attributes:
        file_path: Path of the backup file being written.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str = Field(..., min_length=1, description="Backup file path.")


class BackupFailureEvent(BackupEvent):
    """Payload for :attr:`ConnectionEvent.BACKUP_FAILURE`.

    Attributes:
        exit_code: Exit status of the dump command.
        error_message: Captured standard error of the dump command.
    """

    exit_code: int = Field(..., description="Command exit status.")
    error_message: str = Field(default="", description="Captured stderr.")


class RestoreEvent(BaseModel):
    """Payload for the restore lifecycle events.

    Attributes:
        file_path: Path of the backup file being restored.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str = Field(..., min_length=1, description="Backup file path.")


class RestoreFailureEvent(RestoreEvent):
    """Payload for :attr:`ConnectionEvent.RESTORE_FAILURE`."""

    exit_code: int = Field(..., description="Command exit status.")
    error_message: str = Field(default="", description="Captured stderr.")


class CommandResult(BaseModel):
    """Outcome of one shell command run.

    Attributes:
        command: The command line that was executed, as passed to the shell.
        exit_code: Process exit status.
        output: Captured standard output.
        error: Captured standard error.
    """

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="Executed command line.")
    exit_code: int = Field(..., description="Process exit status.")
    output: str = Field(default="", description="Captured stdout.")
    error: str = Field(default="", description="Captured stderr.")

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the command exited with status 0."""
        return self.exit_code == 0


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class CommandRunner(Protocol):
    """Structural type for anything that can execute a shell command.

    The default implementation is
    :class:`~cms_dbkit.backup.shell.ShellCommandRunner`; tests substitute a
    recording fake.
    """

    async def run(self, command: str, env: dict[str, str] | None = None) -> CommandResult:
        """Run *command* through the shell and capture its result.

        Args:
            command: Complete shell command line.
            env: Extra environment variables for the child process.

        Returns:
            The :class:`CommandResult`.
        """
        ...


EventHandler = Callable[[Any], Awaitable[None] | None]
"""A callable taking one event payload; may return an awaitable."""


__all__ = [
    "BackupEvent",
    "BackupFailureEvent",
    "CommandResult",
    "CommandRunner",
    "ConnectionEvent",
    "EventHandler",
    "RestoreEvent",
    "RestoreFailureEvent",
]
