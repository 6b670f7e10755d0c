"""Backup and restore command construction.

A command is either the operator's own template (``DbConfig.backup_command``
/ ``DbConfig.restore_command``) with its tokens substituted, or the default
command line for the configured dialect:

+------------+--------------------------------+-------------------------------+
| Dialect    | Backup                         | Restore                       |
+============+================================+===============================+
| PostgreSQL | ``pg_dump`` (``PGPASSWORD``)   | ``psql`` (``PGPASSWORD``)     |
+------------+--------------------------------+-------------------------------+
| MySQL      | ``mysqldump`` + defaults file  | ``mysql`` + defaults file     |
+------------+--------------------------------+-------------------------------+
| SQLite     | ``sqlite3 .dump``              | ``sqlite3 <``                 |
+------------+--------------------------------+-------------------------------+

Custom templates are substituted literally: token values are not quoted, so
the operator controls quoting in the template itself.  Values placed into
default commands are shell-quoted.

MySQL credentials are never put on the command line.  They are written to a
``--defaults-extra-file`` under ``DbConfig.temp_path``, which the connection
clears once the command has finished.
"""

from __future__ import annotations

from datetime import UTC, datetime
import logging
import os
from pathlib import Path
import shlex
import shutil
from typing import TYPE_CHECKING, NamedTuple

from cms_dbkit.core.exceptions import ConfigurationError
from cms_dbkit.utils.db_compat import DbDialect
from cms_dbkit.utils.validation import clean_filename

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cms_dbkit.core.config import DbConfig

logger = logging.getLogger(__name__)

MYSQL_DEFAULTS_FILENAME = "my.cnf"


class PreparedCommand(NamedTuple):
    """A shell command line plus the extra environment it needs."""

    command: str
    env: dict[str, str]


######################
# Token substitution #
######################


def substitute_tokens(template: str, tokens: Mapping[str, object]) -> str:
    """Replace every ``{name}`` token in *template* with its value.

    Tokens missing from *tokens* are left untouched, and other braces in the
    template are preserved, so shell constructs such as ``${HOME}`` survive.
    ``None`` values become empty strings.

    Example::

        substitute_tokens("mysqldump {database} > {filePath}",
                          {"database": "craft", "filePath": "/tmp/a.sql"})
        # "mysqldump craft > /tmp/a.sql"
    """
    for name, value in tokens.items():
        template = template.replace(f"{{{name}}}", "" if value is None else str(value))
    return template


def command_tokens(config: DbConfig, file_path: str | Path) -> dict[str, str]:
    """Return the token values available to custom command templates."""
    port = config.db_port
    return {
        "filePath": str(file_path),
        "port": "" if port is None else str(port),
        "server": config.db_server,
        "user": config.db_user,
        "database": config.db_database,
        "schema": config.schema_name,
    }


####################
# Default commands #
####################


def write_mysql_defaults_file(config: DbConfig) -> Path:
    """Write a ``[client]`` options file holding the MySQL credentials.

    The file is created in ``config.temp_path`` with owner-only permissions.

    Returns:
        Path of the written file.
    """
    config.temp_path.mkdir(parents=True, exist_ok=True)
    path = config.temp_path / MYSQL_DEFAULTS_FILENAME
    password = config.db_password.replace("\\", "\\\\").replace('"', '\\"')
    lines = [
        "[client]",
        f"user={config.db_user}",
        f'password="{password}"',
        f"host={config.db_server}",
    ]
    if config.db_port is not None:
        lines.append(f"port={config.db_port}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    path.chmod(0o600)
    return path


def _sqlite_database(config: DbConfig) -> str:
    database = config.db_database
    if not database or database == ":memory:":
        raise ConfigurationError(
            "database_url",
            "an in-memory SQLite database cannot be backed up or restored",
        )
    return database


def _pg_connection_args(config: DbConfig) -> str:
    args = [
        f"--dbname={shlex.quote(config.db_database)}",
        f"--host={shlex.quote(config.db_server)}",
    ]
    if config.db_port is not None:
        args.append(f"--port={config.db_port}")
    args.append(f"--username={shlex.quote(config.db_user)}")
    return " ".join(args)


def _pg_env(config: DbConfig) -> dict[str, str]:
    return {"PGPASSWORD": config.db_password} if config.db_password else {}


def default_backup_command(config: DbConfig, file_path: str | Path) -> PreparedCommand:
    """Return the dialect's default dump command for *file_path*.

    Raises:
        ConfigurationError: When the dialect has no default command.
    """
    target = shlex.quote(str(file_path))
    dialect = config.dialect

    if dialect == DbDialect.POSTGRESQL:
        command = (
            f"pg_dump {_pg_connection_args(config)} --if-exists --clean "
            f"--no-owner --no-privileges --no-acl --file={target} "
            f"--schema={shlex.quote(config.schema_name)}"
        )
        return PreparedCommand(command, _pg_env(config))

    if dialect == DbDialect.MYSQL:
        defaults = shlex.quote(str(write_mysql_defaults_file(config)))
        command = (
            f"mysqldump --defaults-extra-file={defaults} --add-drop-table "
            "--comments --create-options --dump-date --no-autocommit --routines "
            "--set-charset --triggers --single-transaction "
            f"--result-file={target} {shlex.quote(config.db_database)}"
        )
        return PreparedCommand(command, {})

    if dialect == DbDialect.SQLITE:
        command = f"sqlite3 {shlex.quote(_sqlite_database(config))} .dump > {target}"
        return PreparedCommand(command, {})

    raise ConfigurationError(
        "backup_command",
        f"no default backup command for dialect {dialect.value!r}; set backup_command",
    )


def default_restore_command(config: DbConfig, file_path: str | Path) -> PreparedCommand:
    """Return the dialect's default restore command for *file_path*.

    Raises:
        ConfigurationError: When the dialect has no default command.
    """
    source = shlex.quote(str(file_path))
    dialect = config.dialect

    if dialect == DbDialect.POSTGRESQL:
        command = f"psql {_pg_connection_args(config)} --no-password < {source}"
        return PreparedCommand(command, _pg_env(config))

    if dialect == DbDialect.MYSQL:
        defaults = shlex.quote(str(write_mysql_defaults_file(config)))
        command = (
            f"mysql --defaults-extra-file={defaults} "
            f"{shlex.quote(config.db_database)} < {source}"
        )
        return PreparedCommand(command, {})

    if dialect == DbDialect.SQLITE:
        command = f"sqlite3 {shlex.quote(_sqlite_database(config))} < {source}"
        return PreparedCommand(command, {})

    raise ConfigurationError(
        "restore_command",
        f"no default restore command for dialect {dialect.value!r}; set restore_command",
    )


def prepare_backup_command(config: DbConfig, file_path: str | Path) -> PreparedCommand:
    """Return the configured backup command, falling back to the default."""
    if config.backup_command:
        return PreparedCommand(
            substitute_tokens(config.backup_command, command_tokens(config, file_path)),
            {},
        )
    return default_backup_command(config, file_path)


def prepare_restore_command(config: DbConfig, file_path: str | Path) -> PreparedCommand:
    """Return the configured restore command, falling back to the default."""
    if config.restore_command:
        return PreparedCommand(
            substitute_tokens(config.restore_command, command_tokens(config, file_path)),
            {},
        )
    return default_restore_command(config, file_path)


###########
# Helpers #
###########


def backup_filename(site_name: str | None, version: str, now: datetime | None = None) -> str:
    """Return the backup filename ``[site_]ymd_His_v<version>.sql``, lowercased.

    Args:
        site_name: Primary site name; cleaned to ASCII and omitted when empty.
        version: Application version string.
        now: Timestamp to embed (default: current UTC time).

    Example::

        backup_filename("Happy Lager", "3.0.41", datetime(2024, 6, 1, 12, 30, 5, tzinfo=UTC))
        # "happy-lager_240601_123005_v3.0.41.sql"
    """
    now = now or datetime.now(UTC)
    site = clean_filename(site_name or "", ascii_only=True)
    stamp = now.astimezone(UTC).strftime("%y%m%d_%H%M%S")
    filename = f"{site}_" if site else ""
    return f"{filename}{stamp}_v{version}.sql".lower()


def clear_folder(path: Path) -> None:
    """Delete everything inside *path*, keeping the directory itself."""
    if not path.is_dir():
        return
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
    logger.debug("Cleared temporary folder %s", os.fspath(path))


__all__ = [
    "PreparedCommand",
    "backup_filename",
    "clear_folder",
    "command_tokens",
    "default_backup_command",
    "default_restore_command",
    "prepare_backup_command",
    "prepare_restore_command",
    "substitute_tokens",
    "write_mysql_defaults_file",
]
