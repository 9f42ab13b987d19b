"""Launcher entrypoint: run a command with secrets injected into its environment.

Usage:
    envlaunch <command_path> [args...] [--key SECRET_NAME]...

Exit codes:
    0 - Command ran and exited successfully
    1 - Usage error, secret fetch failure, or command failure
"""
import os
import sys
import logging

from agent_envlauncher.launcher.domains.events import LoggingEventSink, configure_event_logging
from agent_envlauncher.launcher.domains.process_runner import SubprocessLauncher
from agent_envlauncher.launcher.workflows.orchestrator import Orchestrator
from agent_envlauncher.secrets.workflows.secret_operations import ConfiguredSecretStore

LOG_LEVEL_ENV_VAR = "ENVLAUNCH_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)


def _event_log_level() -> str:
    level = os.getenv(LOG_LEVEL_ENV_VAR, "INFO").upper()
    return level if level in LOG_LEVELS else "INFO"


def main(argv=None):
    """Launcher entrypoint. Events are written to stderr as JSON lines."""
    tokens = list(sys.argv if argv is None else argv)
    configure_event_logging(sys.stderr, _event_log_level())

    orchestrator = Orchestrator(
        secret_store=ConfiguredSecretStore(),
        launcher=SubprocessLauncher(),
        events=LoggingEventSink(),
    )

    try:
        result = orchestrator.run(tokens, dict(os.environ))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)

    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
