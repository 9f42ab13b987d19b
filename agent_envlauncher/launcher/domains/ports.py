"""Collaborator interfaces injected into the orchestrator."""
from typing import Any, Optional, Protocol, Sequence


class SecretStore(Protocol):
    def fetch(self, name: str) -> str:
        """Return the raw secret payload for ``name``.

        Raises:
            SecretStoreError: If the secret cannot be retrieved
        """
        ...


class ProcessLauncher(Protocol):
    def launch(self, path: str, args: Sequence[str], env: Sequence[str]) -> None:
        """Run ``path`` with ``args`` and ``NAME=VALUE`` environment entries.

        Raises:
            ProcessLaunchError: If the process cannot be started or fails
        """
        ...


class EventSink(Protocol):
    def record(self, level: str, message: str, data: Optional[Any] = None) -> None:
        ...
