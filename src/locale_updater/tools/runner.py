"""
Execution of the external gettext tools.

Every external command goes through ``ToolRunner.run`` so that output capture,
dry-run handling and failure reporting live in one place.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import NamedTuple

from ..utils.core.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)


class ToolInvocation(NamedTuple):
    """Record of one external command."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def tool_name(self) -> str:
        """Base name of the executable."""
        return Path(self.command[0]).name

    def to_error(self) -> ToolExecutionError:
        """Build the exception describing this failed invocation."""
        return ToolExecutionError(self.command, self.returncode, self.stderr)


class ToolRunner:
    """Run external commands, or only log them in dry-run mode."""

    def __init__(self, dry_run: bool = False) -> None:
        self.dry_run: bool = dry_run
        self.history: list[ToolInvocation] = []

    def run(self, command: list[str | Path], check: bool = False) -> ToolInvocation:
        """
        Run one command and wait for it to exit.

        Args:
            command: Executable followed by its arguments
            check: Raise ToolExecutionError when the command fails

        Returns:
            The invocation record

        Raises:
            ToolExecutionError: If check is set and the command fails
        """
        args = [str(part) for part in command]
        logger.debug(f"Running: {shlex.join(args)}")

        if self.dry_run:
            logger.info(f"DRY RUN: Would run {shlex.join(args)}")
            invocation = ToolInvocation(command=args, returncode=0, dry_run=True)
            self.history.append(invocation)
            return invocation

        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                check=False,
            )
            invocation = ToolInvocation(
                command=args,
                returncode=completed.returncode,
                stdout=completed.stdout or "",
                stderr=completed.stderr or "",
            )
        except OSError as e:
            # Tool vanished or is not executable since it was resolved
            invocation = ToolInvocation(command=args, returncode=127, stderr=str(e))

        self.history.append(invocation)

        if not invocation.succeeded:
            logger.error(
                f"{invocation.tool_name} failed with status {invocation.returncode}"
                + (f": {invocation.stderr.strip()}" if invocation.stderr.strip() else "")
            )
            if check:
                raise invocation.to_error()
        elif invocation.stderr.strip():
            # gettext tools report progress on stderr
            logger.debug(f"{invocation.tool_name}: {invocation.stderr.strip()}")

        return invocation
