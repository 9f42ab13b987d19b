"""GCP Secret Manager client wrapper."""
import os
import logging
from typing import Optional, Dict, Any
from google.cloud import secretmanager

from agent_envlauncher.launcher.domains.errors import SecretStoreError

logger = logging.getLogger(__name__)


class GCPSecretClient:
    """Secret store backed by GCP Secret Manager."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, project_id: Optional[str] = None):
        self.config = config or {}
        self._project_id = project_id
        self._client = None

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Lazy-initialize client."""
        if self._client is None:
            auth = self.config.get("authentication") or {}
            service_account_path = auth.get("service_account_path")
            if service_account_path:
                logger.debug(f"Using service account: {service_account_path}")
                self._client = secretmanager.SecretManagerServiceClient.from_service_account_file(
                    service_account_path
                )
            else:
                self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def get_project_id(self) -> Optional[str]:
        """
        Get GCP project ID.

        Priority order:
        1. Explicit project_id passed to the constructor
        2. GCP_PROJECT environment variable
        3. gcp.project_id in the config file

        Returns:
            Project ID string, or None if not found
        """
        if self._project_id:
            return self._project_id

        gcp_project_env = os.getenv("GCP_PROJECT")
        if gcp_project_env:
            logger.debug(f"Using GCP_PROJECT from environment: {gcp_project_env}")
            return gcp_project_env

        project_id = (self.config.get("gcp") or {}).get("project_id")
        if project_id:
            logger.debug(f"Using project_id from config: {project_id}")
            return project_id

        return None

    def secret_version_path(self, secret_name: str) -> str:
        """Resolve a secret name to its latest version resource path."""
        if secret_name.startswith("projects/"):
            if "/versions/" in secret_name:
                return secret_name
            return f"{secret_name}/versions/latest"

        project_id = self.get_project_id()
        if not project_id:
            raise SecretStoreError(
                "Project ID not found. Please set GCP_PROJECT environment variable "
                "or configure gcp.project_id in config file"
            )
        return f"projects/{project_id}/secrets/{secret_name}/versions/latest"

    def fetch(self, secret_name: str) -> str:
        """
        Fetch secret from GCP Secret Manager.

        Args:
            secret_name: Secret name, or a full ``projects/...`` resource path

        Returns:
            Secret payload decoded as UTF-8

        Raises:
            SecretStoreError: If the secret cannot be fetched
        """
        name = self.secret_version_path(secret_name)
        try:
            response = self.client.access_secret_version(request={"name": name})
            return response.payload.data.decode("UTF-8")
        except Exception as e:
            logger.debug(f"GCP fetch failed for {secret_name}: {e}")
            raise SecretStoreError(f"failed to get secret value: {e}") from e
