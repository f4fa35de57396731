"""Execution of external commands."""

import asyncio
import logging
import os
import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NoReturn

from ..core.errors import CommandError, redact_argv

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of a finished command."""

    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""


class CommandRunner(ABC):
    """Abstract base class for command runners."""

    @abstractmethod
    async def run(
        self,
        argv: list[str],
        input: str | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """
        Run a command to completion.

        Args:
            argv: Program and arguments
            input: Optional text written to the command's stdin
            capture: Capture stdout instead of passing it through

        Returns:
            CommandResult of a successful run

        Raises:
            CommandError: If the command exits non-zero
        """
        pass

    @abstractmethod
    def replace_process(self, argv: list[str]) -> NoReturn:
        """Replace the current process with ``argv``."""
        pass


class SubprocessRunner(CommandRunner):
    """Runs commands as asyncio subprocesses, one at a time."""

    async def run(
        self,
        argv: list[str],
        input: str | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run a command, inheriting stdout unless ``capture`` is set."""
        logger.info("+ %s", shlex.join(redact_argv(argv)))

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE if input is not None else None,
                stdout=asyncio.subprocess.PIPE if capture else None,
                stderr=asyncio.subprocess.PIPE if capture else None,
            )
        except FileNotFoundError as e:
            raise CommandError(argv, 127, f"{argv[0]}: command not found") from e

        stdout, stderr = await process.communicate(
            input.encode() if input is not None else None
        )
        result = CommandResult(
            argv=list(argv),
            returncode=process.returncode,
            stdout=stdout.decode() if stdout else "",
            stderr=stderr.decode() if stderr else "",
        )

        if result.returncode != 0:
            raise CommandError(argv, result.returncode, result.stderr)

        return result

    def replace_process(self, argv: list[str]) -> NoReturn:
        """exec into ``argv``; the current process never returns."""
        logger.debug("exec %s", shlex.join(argv))
        os.execvp(argv[0], argv)
