"""Workflow for launching a command with secrets injected into its environment."""
import os
from typing import Mapping, Optional, Sequence

from ..domains.argument_parser import parse_arguments
from ..domains.environment import build_environment
from ..domains.errors import LaunchError, LauncherError, SecretFetchError
from ..domains.models import ExecutionResult
from ..domains.ports import EventSink, ProcessLauncher, SecretStore
from agent_envlauncher.secrets.domains.decoder import decode_secret


class Orchestrator:
    """Parses arguments, resolves secrets in order, and launches the command.

    Fail-fast: the first error ends the run. A failed secret fetch means no
    further secrets are fetched and the command is never launched.
    """

    def __init__(self, secret_store: SecretStore, launcher: ProcessLauncher, events: EventSink):
        self.secret_store = secret_store
        self.launcher = launcher
        self.events = events

    def run(self, tokens: Sequence[str], base_env: Optional[Mapping[str, str]] = None) -> ExecutionResult:
        """
        Execute one run.

        Args:
            tokens: Raw argument list, program name at index 0
            base_env: Inherited environment snapshot (os.environ is copied once if omitted)

        Returns:
            ExecutionResult; on failure it carries the first error encountered
        """
        if base_env is None:
            base_env = dict(os.environ)

        try:
            # Parsing
            command, references = parse_arguments(tokens)

            # Resolving
            resolved = []
            for reference in references:
                self.events.record("info", "Fetching secret", {"secretName": reference.name})
                try:
                    raw = self.secret_store.fetch(reference.name)
                except Exception as e:
                    raise SecretFetchError(reference.name, e) from e

                pairs = decode_secret(raw)
                self.events.record(
                    "info",
                    "Retrieved secret keys",
                    {"secretName": reference.name, "keys": sorted(pairs)},
                )
                resolved.append((reference, pairs))

            # Launching
            self.events.record(
                "info",
                "Executing command",
                {"commandPath": command.path, "args": list(command.args)},
            )
            env = build_environment(base_env, resolved)
            try:
                self.launcher.launch(command.path, list(command.args), env)
            except Exception as e:
                raise LaunchError(e) from e
        except LauncherError as e:
            self.events.record("error", str(e), {"kind": e.kind, "error": str(e)})
            return ExecutionResult(error=e)

        self.events.record("info", "Command executed successfully")
        return ExecutionResult()
