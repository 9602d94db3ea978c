"""External command execution utilities"""

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ..api.exceptions import ExternalCommandError

logger = logging.getLogger(__name__)


def format_command(args: Sequence[str]) -> str:
    """
    Render a command as a copy-pasteable shell line

    Args:
        args: Command and arguments

    Returns:
        Shell-quoted command line
    """
    return shlex.join([str(a) for a in args])


class CommandRunner:
    """Runs external commands, or only prints them in dry-run mode

    Read-only probes (``probe``, ``capture``) always execute. Commands with
    side effects go through ``run`` which honours ``dry_run``.
    """

    def __init__(self,
                 dry_run: bool = False,
                 echo: Optional[Callable[[str], None]] = None,
                 cwd: Optional[Union[str, Path]] = None):
        """
        Initialize runner

        Args:
            dry_run: Print mutating commands instead of executing them
            echo: Callback receiving the command line in dry-run mode
            cwd: Working directory for every command
        """
        self.dry_run = dry_run
        self.echo = echo or (lambda line: print(f"  {line}"))
        self.cwd = cwd

    @staticmethod
    def which(name: str) -> Optional[str]:
        """Return the path of an executable on PATH, or None"""
        return shutil.which(name)

    def probe(self, args: Sequence[str]) -> bool:
        """
        Run a command silently and report whether it exited with 0

        Args:
            args: Command and arguments

        Returns:
            True on exit status 0, False otherwise or if the binary is missing
        """
        logger.debug("Probing: %s", format_command(args))
        try:
            result = subprocess.run(
                list(args),
                cwd=self.cwd,
                capture_output=True,
                text=True
            )
        except FileNotFoundError:
            return False
        return result.returncode == 0

    def capture(self, args: Sequence[str]) -> str:
        """
        Run a command and return its stripped stdout

        Args:
            args: Command and arguments

        Returns:
            Command output

        Raises:
            ExternalCommandError: If the command fails or cannot be started
        """
        logger.debug("Capturing: %s", format_command(args))
        try:
            result = subprocess.run(
                list(args),
                cwd=self.cwd,
                capture_output=True,
                text=True
            )
        except FileNotFoundError as e:
            raise ExternalCommandError(args, 127, str(e)) from e

        if result.returncode != 0:
            details = (result.stderr or "").strip() or (result.stdout or "").strip()
            raise ExternalCommandError(args, result.returncode, details or None)

        return result.stdout.strip()

    def run(self, args: Sequence[str]) -> None:
        """
        Run a command with side effects, streaming its output to the terminal

        In dry-run mode the command line is echoed and nothing executes.

        Args:
            args: Command and arguments

        Raises:
            ExternalCommandError: If the command fails or cannot be started
        """
        line = format_command(args)
        if self.dry_run:
            self.echo(line)
            return

        logger.debug("Running: %s", line)
        try:
            result = subprocess.run(list(args), cwd=self.cwd)
        except FileNotFoundError as e:
            raise ExternalCommandError(args, 127, str(e)) from e

        if result.returncode != 0:
            raise ExternalCommandError(args, result.returncode)
