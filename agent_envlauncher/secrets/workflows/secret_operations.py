"""Workflow for selecting a secret store backend from configuration."""
import os
import logging
from typing import Any, Callable, Dict, List, Optional

from agent_envlauncher.launcher.domains.errors import SecretStoreError
from ..domains.aws_client import AWSSecretClient
from ..domains.config_loader import ConfigError, SUPPORTED_BACKENDS, load_config
from ..domains.decoder import decode_secret
from ..domains.gcp_client import GCPSecretClient

logger = logging.getLogger(__name__)

BACKEND_ENV_VAR = "ENVLAUNCH_BACKEND"

_BACKENDS = {
    "gcp": GCPSecretClient,
    "aws": AWSSecretClient,
}


def resolve_backend(
    backend: Optional[str] = None,
    config_loader: Callable[[], Dict[str, Any]] = load_config,
) -> str:
    """
    Determine which backend a fetch will use.

    Priority order:
    1. Explicit backend argument
    2. ENVLAUNCH_BACKEND environment variable
    3. backend in the config file (defaults to gcp)

    The config is only loaded when neither of the first two is set.

    Raises:
        ConfigError: If the config file has to be read and is invalid
    """
    return backend or os.getenv(BACKEND_ENV_VAR) or config_loader().get("backend", "gcp")


def create_secret_client(config: Dict[str, Any], backend: Optional[str] = None):
    """
    Build the secret store client for a backend chosen by resolve_backend.

    Raises:
        SecretStoreError: If the backend is not supported
    """
    backend = resolve_backend(backend, lambda: config)
    client_cls = _BACKENDS.get(backend)
    if client_cls is None:
        raise SecretStoreError(
            f"Unsupported backend: {backend} (supported: {', '.join(SUPPORTED_BACKENDS)})"
        )
    logger.debug(f"Using secret store backend: {backend}")
    return client_cls(config)


class ConfiguredSecretStore:
    """Secret store that loads configuration and picks a backend on first fetch.

    Runs without any --key never read the config file or touch credentials.
    Nothing fetched through this store is cached.
    """

    def __init__(
        self,
        backend: Optional[str] = None,
        config_loader: Callable[[], Dict[str, Any]] = load_config,
    ):
        self.backend = backend
        self._config_loader = config_loader
        self._client = None

    def _get_client(self):
        if self._client is None:
            try:
                config = self._config_loader()
            except ConfigError as e:
                raise SecretStoreError(f"invalid configuration: {e}") from e
            self._client = create_secret_client(config, self.backend)
        return self._client

    def fetch(self, name: str) -> str:
        return self._get_client().fetch(name)


def get_secret_keys(secret_name: str, backend: Optional[str] = None) -> List[str]:
    """
    Fetch a secret and list the environment variable names it would set.

    Args:
        secret_name: Name of the secret to fetch
        backend: Backend override ("gcp" or "aws")

    Returns:
        Sorted list of key names (values are never returned)

    Raises:
        SecretStoreError: If the secret cannot be fetched
    """
    raw = ConfiguredSecretStore(backend=backend).fetch(secret_name)
    return sorted(decode_secret(raw))
