"""AWS Secrets Manager client wrapper."""
import os
import logging
from typing import Optional, Dict, Any

import boto3

from agent_envlauncher.launcher.domains.errors import SecretStoreError

logger = logging.getLogger(__name__)


class AWSSecretClient:
    """Secret store backed by AWS Secrets Manager."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, region: Optional[str] = None):
        self.config = config or {}
        self._region = region
        self._client = None

    def get_region(self) -> Optional[str]:
        """
        Get AWS region.

        Priority order:
        1. Explicit region passed to the constructor
        2. aws.region in the config file
        3. AWS_REGION / AWS_DEFAULT_REGION environment variables

        Returns:
            Region name, or None to let boto3 resolve it
        """
        if self._region:
            return self._region
        region = (self.config.get("aws") or {}).get("region")
        if region:
            return region
        return os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")

    @property
    def client(self):
        """Lazy-initialize client."""
        if self._client is None:
            region = self.get_region()
            logger.debug(f"Creating Secrets Manager client for region: {region or 'default'}")
            self._client = boto3.client("secretsmanager", region_name=region)
        return self._client

    def fetch(self, secret_name: str) -> str:
        """
        Fetch secret from AWS Secrets Manager.

        Args:
            secret_name: Secret name or ARN

        Returns:
            The SecretString value, or "" when the secret has no string value

        Raises:
            SecretStoreError: If the secret cannot be fetched
        """
        try:
            response = self.client.get_secret_value(SecretId=secret_name)
        except Exception as e:
            logger.debug(f"AWS fetch failed for {secret_name}: {e}")
            raise SecretStoreError(f"failed to get secret value: {e}") from e
        return response.get("SecretString") or ""
