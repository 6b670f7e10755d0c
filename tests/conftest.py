"""Shared pytest fixtures for the cms-dbkit test suite.

Hierarchy
---------
sqlite_url              file-backed aiosqlite URL inside tmp_path
db_config               DbConfig for sqlite_url with prefix "craft_" and tmp backup dirs
fake_runner             CommandRunner that records commands instead of running them
connection              open Connection over db_config + fake_runner
events                  list collecting (event, payload) tuples from every lifecycle event
create_table            coroutine factory that runs raw DDL on the connection's engine
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import pytest
import pytest_asyncio
from sqlalchemy import text

from cms_dbkit.connection import Connection
from cms_dbkit.core.config import DbConfig
from cms_dbkit.core.types import CommandResult, ConnectionEvent

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


##############
# Fake shell #
##############


class FakeRunner:
    """Records every command and answers with a canned result."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, str] | None]] = []
        self.exit_code = 0
        self.error = ""

    async def run(self, command: str, env: dict[str, str] | None = None) -> CommandResult:
        self.calls.append((command, env))
        return CommandResult(command=command, exit_code=self.exit_code, error=self.error)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


##########
# Config #
##########


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep CMS_DB_* variables from the host out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("CMS_DB_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'craft.db'}"


@pytest.fixture
def db_config(tmp_path, sqlite_url) -> DbConfig:
    return DbConfig(
        database_url=sqlite_url,
        table_prefix="craft_",
        backup_path=tmp_path / "backups",
        temp_path=tmp_path / "temp",
        site_name="Happy Lager",
        app_version="3.0.41",
    )


##############
# Connection #
##############


@pytest_asyncio.fixture
async def connection(db_config, fake_runner) -> AsyncIterator[Connection]:
    conn = Connection(db_config, runner=fake_runner)
    await conn.open()
    yield conn
    await conn.close()


@pytest.fixture
def events(connection) -> list[tuple[ConnectionEvent, Any]]:
    received: list[tuple[ConnectionEvent, Any]] = []
    for event in ConnectionEvent:
        connection.on(event, lambda payload, _event=event: received.append((_event, payload)))
    return received


@pytest.fixture
def create_table(connection):
    """Return a coroutine that executes raw DDL against *connection*."""

    async def _create(ddl: str) -> None:
        engine = await connection.get_engine()
        async with engine.begin() as conn:
            await conn.execute(text(ddl))

    return _create
