"""Backup and restore command construction and execution."""

from cms_dbkit.backup.commands import (
    PreparedCommand,
    backup_filename,
    default_backup_command,
    default_restore_command,
    prepare_backup_command,
    prepare_restore_command,
    substitute_tokens,
)
from cms_dbkit.backup.shell import ShellCommandRunner

__all__ = [
    "PreparedCommand",
    "ShellCommandRunner",
    "backup_filename",
    "default_backup_command",
    "default_restore_command",
    "prepare_backup_command",
    "prepare_restore_command",
    "substitute_tokens",
]
