"""Command runner for executing shell commands.

This module provides the base command execution functionality used by
all specialized command modules.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from .types import CommandResult


class CommandRunner:
    """Low-level command executor with consistent result handling.

    All specialized command modules (Docker, Helm) use this runner for
    actual command execution. Commands run in the project root unless a
    working directory is given.
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize the command runner.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
        """
        self.project_root = project_root

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
        check: bool = False,
    ) -> CommandResult:
        """Execute a shell command and return structured result.

        With capture_output=False the child inherits the terminal, so its
        output is streamed directly to the user.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to project_root)
            capture_output: Whether to capture stdout/stderr
            check: Whether to raise exception on non-zero exit code

        Returns:
            CommandResult with success status, output, and return code

        Raises:
            subprocess.CalledProcessError: If check=True and command fails
            OSError: If the executable cannot be started
        """
        logger.debug(f"Running: {' '.join(cmd)}")
        result = subprocess.run(
            list(cmd),
            cwd=cwd or self.project_root,
            capture_output=capture_output,
            text=True,
            check=check,
        )
        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )

    def run_with_input(
        self,
        cmd: Sequence[str],
        input_text: str,
        *,
        cwd: Path | None = None,
    ) -> CommandResult:
        """Execute a command, feeding input_text to its stdin.

        Used for secrets that must not appear in the argument vector.
        The input itself is never logged.

        Raises:
            OSError: If the executable cannot be started
        """
        logger.debug(f"Running (stdin supplied): {' '.join(cmd)}")
        result = subprocess.run(
            list(cmd),
            cwd=cwd or self.project_root,
            input=input_text,
            text=True,
            check=False,
        )
        return CommandResult(
            success=result.returncode == 0,
            returncode=result.returncode,
        )
