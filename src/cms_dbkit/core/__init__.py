"""Core abstractions: config, event types, and exceptions."""

from cms_dbkit.core.config import DbConfig
from cms_dbkit.core.exceptions import (
    BackupError,
    ConfigurationError,
    DbConnectError,
    DbKitError,
    InvalidArgumentError,
    MigrationError,
    RestoreError,
    TestSetupError,
)
from cms_dbkit.core.types import (
    BackupEvent,
    BackupFailureEvent,
    CommandResult,
    CommandRunner,
    ConnectionEvent,
    RestoreEvent,
    RestoreFailureEvent,
)

__all__ = [
    # Config
    "DbConfig",
    # Exceptions
    "BackupError",
    "ConfigurationError",
    "DbConnectError",
    "DbKitError",
    "InvalidArgumentError",
    "MigrationError",
    "RestoreError",
    "TestSetupError",
    # Types
    "BackupEvent",
    "BackupFailureEvent",
    "CommandResult",
    "CommandRunner",
    "ConnectionEvent",
    "RestoreEvent",
    "RestoreFailureEvent",
]
