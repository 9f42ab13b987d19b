"""Error types for the launcher.

Two layers:
- Collaborator errors (SecretStoreError, ProcessLaunchError) are raised by the
  secret store clients and the process runner.
- Run errors (UsageError, SecretFetchError, LaunchError) are what a run ends
  with. Each carries a ``kind`` tag so callers can branch without string
  matching.
"""
from typing import Optional


USAGE = "Usage: envlaunch <command_path> [args...] [--key SECRET_NAME]..."


class SecretStoreError(Exception):
    """Secret store could not return a secret (not found, transport, config)."""
    pass


class ProcessLaunchError(Exception):
    """Child process could not be started or exited with a failure status."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class LauncherError(Exception):
    """Base class for errors that terminate a run."""

    kind = "launcher"


class UsageError(LauncherError):
    """Not enough arguments to determine the command to run."""

    kind = "usage"

    def __init__(self, message: str = USAGE):
        super().__init__(message)


class SecretFetchError(LauncherError):
    """Secret store call failed for one secret reference."""

    kind = "secret_fetch"

    def __init__(self, secret_name: str, cause: Exception):
        super().__init__(f"failed to get secret {secret_name}: {cause}")
        self.secret_name = secret_name
        self.cause = cause


class LaunchError(LauncherError):
    """Process launcher failed or the child process reported failure."""

    kind = "launch"

    def __init__(self, cause: Exception):
        super().__init__(f"Command execution error: {cause}")
        self.cause = cause
        self.returncode = getattr(cause, "returncode", None)
