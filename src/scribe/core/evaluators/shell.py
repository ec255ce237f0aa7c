"""Shell flavor - runs each expression as a shell command.

Each execution spawns a fresh subprocess; no state (cwd changes,
variables) carries over between calls.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from scribe.core.flavor import EvaluationError, ReplFlavor, default_format_error

if TYPE_CHECKING:
    from scribe.core.config import ScribeConfig

logger = logging.getLogger(__name__)

SHELL_TITLE = "Shell REPL"
SHELL_PROMPT = "sh$"
DEFAULT_SHELL_TIMEOUT = 30.0


class ShellCommandError(EvaluationError):
    """Shell command failed or timed out.

    Attributes:
        returncode: Exit status, or None on timeout.
        stderr: Captured standard error.
    """

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


@dataclass
class ShellEvaluator:
    """Runs shell commands with a timeout.

    Attributes:
        cwd: Working directory for commands (None = inherit).
        timeout: Seconds before a command is killed.
    """

    cwd: str | None = None
    timeout: float = DEFAULT_SHELL_TIMEOUT

    def execute(self, expression: str) -> str:
        """Run ``expression`` and return its stdout.

        Raises:
            ShellCommandError: On non-zero exit or timeout.
        """
        if not expression.strip():
            return ""

        try:
            proc = subprocess.run(
                expression,
                shell=True,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.debug("Shell command timed out: %r", expression)
            raise ShellCommandError(f"Command timed out after {self.timeout}s") from e

        if proc.returncode != 0:
            stderr = proc.stderr.strip()
            raise ShellCommandError(
                stderr or f"Command exited with status {proc.returncode}",
                returncode=proc.returncode,
                stderr=proc.stderr,
            )

        return proc.stdout.rstrip("\n")


def format_shell_error(error: BaseException) -> str:
    """Render a failure, prefixing the exit status when there is one."""
    if isinstance(error, ShellCommandError) and error.returncode is not None:
        return f"[exit {error.returncode}] {error}"
    return default_format_error(error)


def shell_flavor(config: ScribeConfig | None = None) -> ReplFlavor:
    """Build the shell REPL flavor."""
    timeout = config.shell_timeout if config is not None else DEFAULT_SHELL_TIMEOUT
    return ReplFlavor(
        evaluator=ShellEvaluator(timeout=timeout),
        title=SHELL_TITLE,
        prompt=SHELL_PROMPT,
        grammar_name="Shell Script (Bash)",
        format_error=format_shell_error,
    )
