"""Run the watched command and capture its combined output."""

from __future__ import annotations

import asyncio
import logging
import subprocess
import time
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one command invocation.

    ``output`` is the text to display: stdout and stderr interleaved, or the
    error message when the command could not be started at all. A non-zero
    ``exit_code`` is not an error.
    """

    output: str
    exit_code: int | None = None
    duration: float = 0.0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class Runner(Protocol):
    async def run(self) -> CommandResult: ...


class CommandRunner:
    """Runs ``argv`` with stderr merged into stdout."""

    def __init__(self, argv: list[str]) -> None:
        if not argv:
            raise ValueError("command must not be empty")
        self.argv = list(argv)

    async def run(self) -> CommandResult:
        start = time.monotonic()
        logger.debug("running %s", self.argv)
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
            stdout_bytes, _ = await proc.communicate()
        except (OSError, ValueError) as exc:
            duration = time.monotonic() - start
            message = str(exc)
            logger.warning("cannot run %s: %s", self.argv[0], message)
            return CommandResult(output=message, duration=duration, error=message)

        duration = time.monotonic() - start
        logger.debug(
            "%s exited with %s after %.3fs", self.argv[0], proc.returncode, duration
        )
        return CommandResult(
            output=stdout_bytes.decode("utf-8", errors="replace"),
            exit_code=proc.returncode,
            duration=duration,
        )
