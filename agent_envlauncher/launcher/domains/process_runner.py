"""Run the target command as a child process."""
import logging
import subprocess
from typing import Dict, Optional, Sequence, TextIO

from .errors import ProcessLaunchError

logger = logging.getLogger(__name__)


def env_entries_to_dict(env: Sequence[str]) -> Dict[str, str]:
    """Convert ``NAME=VALUE`` strings to a dict; later duplicates win."""
    result: Dict[str, str] = {}
    for entry in env:
        name, sep, value = entry.partition("=")
        if not sep:
            logger.debug(f"Ignoring malformed environment entry without '=': {name}")
            continue
        result[name] = value
    return result


class SubprocessLauncher:
    """Launch commands with subprocess, wiring the parent's stdio by default."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr

    def launch(self, path: str, args: Sequence[str], env: Sequence[str]) -> None:
        """
        Run ``path`` with ``args`` and block until it exits.

        Args:
            path: Executable to run
            args: Arguments passed to the executable
            env: Complete child environment as ``NAME=VALUE`` strings

        Raises:
            ProcessLaunchError: If the process cannot be started or exits nonzero
        """
        try:
            result = subprocess.run(
                [path, *args],
                env=env_entries_to_dict(env),
                stdin=self.stdin,
                stdout=self.stdout,
                stderr=self.stderr,
                check=False,
            )
        except (OSError, ValueError) as e:
            # ValueError: NUL byte in the command, an argument or the environment
            raise ProcessLaunchError(f"failed to start {path}: {e}") from e

        if result.returncode != 0:
            raise ProcessLaunchError(
                f"{path} exited with status {result.returncode}",
                returncode=result.returncode,
            )
