"""Custom exceptions for cms-dbkit.

All exceptions derive from ``DbKitError`` so callers can catch the entire
family with a single ``except DbKitError`` clause while still being able to
handle individual sub-types for fine-grained error recovery.

Exception hierarchy::

    DbKitError
    ├── InvalidArgumentError
    ├── ConfigurationError
    ├── DbConnectError
    ├── BackupError
    ├── RestoreError
    ├── MigrationError
    └── TestSetupError

Design decisions:
    - Every exception carries a structured ``details`` dict that is safe to
      log.  It must never contain passwords or full connection URLs.
    - Error messages are operator-focused: they say what failed and, where
      possible, which setting to look at.
    - All subclasses call ``super().__init__(message, details)`` so the base
      ``DbKitError`` attributes are always populated.
"""

from __future__ import annotations

from typing import Any


class DbKitError(Exception):
    """Base exception for all cms-dbkit errors.

    Attributes:
        message: Human-readable description of the error.
        details: Supplementary key-value context.  Safe to log; must never
            contain raw secrets.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.details: dict[str, Any] = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return ``human-readable`` string."""
        if self.details:
            return f"{self.message} | details={self.details}"
        return self.message

    def __repr__(self) -> str:
        """Return ``repr`` string for debugging purpose."""
        return f"{type(self).__name__}(message={self.message!r})"


class InvalidArgumentError(DbKitError):
    """Raised when a caller passes a value that violates a function contract.

    Examples are a non-positive identifier length limit, a migration class
    that does not derive from ``Migration``, or a missing project-config file.

    Attributes:
        parameter: Name of the offending argument.
        reason: Why the value is invalid.
    """

    def __init__(
        self,
        parameter: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Invalid argument {parameter!r}: {reason}", details)
        self.parameter = parameter
        self.reason = reason


class ConfigurationError(DbKitError):
    """Raised when ``DbConfig`` cannot support the requested operation.

    Attributes:
        parameter: The name of the relevant configuration field.
        reason: Why the current value is unusable.
    """

    def __init__(
        self,
        parameter: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Invalid configuration for {parameter!r}: {reason}", details)
        self.parameter = parameter
        self.reason = reason


class DbConnectError(DbKitError):
    """Raised when the connection cannot be opened.

    Attributes:
        reason: A concise, operator-readable description of the failure.
    """

    def __init__(
        self,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Database connection failed: {reason}", details)
        self.reason = reason


class BackupError(DbKitError):
    """Raised when the backup command exits unsuccessfully.

    Attributes:
        file_path: Where the backup was supposed to be written.
        exit_code: Exit status of the dump command.
        error_message: Captured standard error of the dump command.
    """

    def __init__(
        self,
        file_path: str,
        exit_code: int,
        error_message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Could not perform backup to {file_path!r}. "
            f"Error: {error_message}. Exit code: {exit_code}",
            details,
        )
        self.file_path = file_path
        self.exit_code = exit_code
        self.error_message = error_message


class RestoreError(DbKitError):
    """Raised when the restore command exits unsuccessfully.

    Attributes:
        file_path: The backup file that was being restored.
        exit_code: Exit status of the restore command.
        error_message: Captured standard error of the restore command.
    """

    def __init__(
        self,
        file_path: str,
        exit_code: int,
        error_message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Could not perform restore from {file_path!r}. "
            f"Error: {error_message}. Exit code: {exit_code}",
            details,
        )
        self.file_path = file_path
        self.exit_code = exit_code
        self.error_message = error_message


class MigrationError(DbKitError):
    """Raised when a migration's ``up`` step fails.

    Attributes:
        migration: Class name of the failing migration.
        reason: The underlying error description.
    """

    def __init__(
        self,
        migration: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Migration {migration!r} failed: {reason}", details)
        self.migration = migration
        self.reason = reason


class TestSetupError(DbKitError):
    """Raised when the test database cannot be brought into a known state.

    Attributes:
        operation: The bootstrap step that failed (e.g. ``"cleanse_db"``).
        reason: Why it failed.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        operation: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Test setup failed during {operation!r}: {reason}", details)
        self.operation = operation
        self.reason = reason


__all__ = [
    "BackupError",
    "ConfigurationError",
    "DbConnectError",
    "DbKitError",
    "InvalidArgumentError",
    "MigrationError",
    "RestoreError",
    "TestSetupError",
]
