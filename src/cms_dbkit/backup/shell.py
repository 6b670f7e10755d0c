"""Async shell-command runner used for dump and restore binaries.

Commands run through the system shell (``asyncio.create_subprocess_shell``)
because both default and operator-supplied commands rely on redirection
(``>``/``<``).  The event loop is never blocked while the dump runs.
"""

from __future__ import annotations

import asyncio
import logging
import os

from cms_dbkit.core.types import CommandResult

logger = logging.getLogger(__name__)


class ShellCommandRunner:
    """Run shell commands and capture their exit status and output.

    Args:
        timeout: Optional number of seconds after which the child process
            is killed.  ``None`` waits indefinitely.

    Example::

        runner = ShellCommandRunner(timeout=600)
        result = await runner.run("pg_dump ... --file=/tmp/a.sql", env={"PGPASSWORD": "..."})
        if not result.succeeded:
            print(result.error)
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    async def run(self, command: str, env: dict[str, str] | None = None) -> CommandResult:
        """Run *command* through the shell.

        Args:
            command: Complete shell command line.
            env: Extra environment variables merged over ``os.environ``.

        Returns:
            The captured :class:`~cms_dbkit.core.types.CommandResult`.  A
            timeout is reported as exit code ``-1`` rather than raised.
        """
        child_env = {**os.environ, **(env or {})}
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=child_env,
        )
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), self.timeout)
        except TimeoutError:
            process.kill()
            await process.wait()
            logger.error("Command timed out after %ss", self.timeout)
            return CommandResult(
                command=command,
                exit_code=-1,
                error=f"Command timed out after {self.timeout}s",
            )

        exit_code = process.returncode if process.returncode is not None else -1
        return CommandResult(
            command=command,
            exit_code=exit_code,
            output=stdout.decode("utf-8", errors="replace"),
            error=stderr.decode("utf-8", errors="replace").strip(),
        )


__all__ = ["ShellCommandRunner"]
