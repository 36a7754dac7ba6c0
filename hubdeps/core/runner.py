"""External command runners.

Defines the ``CommandRunner`` Protocol used by every shell-out in hubdeps,
and ``SubprocessRunner``, the blocking ``subprocess`` implementation.

Calls block until the command exits. There are no retries and no
timeouts; stderr always streams straight to the terminal so that tool
failures surface as the tool printed them.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Protocol, runtime_checkable

from hubdeps.models.commands import CommandResult, CommandSpec

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
EXIT_NOT_FOUND = 127


class CommandFailedError(RuntimeError):
    """Raised when an external command exits non-zero or cannot start."""

    def __init__(self, argv: tuple[str, ...], returncode: int, reason: str = "") -> None:
        self.argv = argv
        self.returncode = returncode
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Command {argv[0] if argv else '?'!r} failed with exit code {returncode}{detail}"
        )

    @property
    def exit_status(self) -> int:
        """Process exit status to report; signal deaths map to ``128 + signum``."""
        return 128 - self.returncode if self.returncode < 0 else self.returncode


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for external command execution.

    Implementations must raise ``CommandFailedError`` on a non-zero exit,
    so callers only ever see successful results.
    """

    def run(self, spec: CommandSpec, *, capture_output: bool = False) -> CommandResult:
        """Run *spec* to completion.

        Parameters
        ----------
        spec:
            The command to run.
        capture_output:
            Capture stdout into ``CommandResult.stdout`` instead of letting
            it stream to the terminal.
        """
        ...


class SubprocessRunner:
    """Runs commands with :func:`subprocess.run`."""

    def run(self, spec: CommandSpec, *, capture_output: bool = False) -> CommandResult:
        logger.debug("Running: %s", spec.display())
        env = {**os.environ, **spec.env} if spec.env else None
        try:
            completed = subprocess.run(
                list(spec.argv),
                cwd=spec.cwd,
                env=env,
                stdout=subprocess.PIPE if capture_output else None,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CommandFailedError(spec.argv, EXIT_NOT_FOUND, str(exc)) from exc

        if completed.returncode != 0:
            logger.error(
                "Command exited with code %d: %s", completed.returncode, spec.display()
            )
            raise CommandFailedError(spec.argv, completed.returncode)

        return CommandResult(
            argv=spec.argv,
            returncode=completed.returncode,
            stdout=completed.stdout if capture_output else None,
        )
