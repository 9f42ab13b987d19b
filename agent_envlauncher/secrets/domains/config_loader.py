"""Configuration loader for agent-envlauncher."""
import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .preferences import get_preference

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("gcp", "aws")

DEFAULT_CONFIG: Dict[str, Any] = {
    "backend": "gcp",
    "gcp": {},
    "aws": {},
}


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def default_config_path() -> Path:
    return Path.home() / ".config" / "agent-envlauncher" / "config.yml"


def _get_config_path() -> Optional[str]:
    """
    Locate the config file.

    Priority order:
    1. User preference (``config_path`` in preferences.json)
    2. Default location: ~/.config/agent-envlauncher/config.yml

    Returns:
        Absolute path to the config file, or None if no file exists
    """
    config_path_pref = get_preference("config_path")
    if config_path_pref:
        config_path = Path(config_path_pref)
        if config_path.exists():
            logger.info(f"Using config from preference: {config_path}")
            return str(config_path)
        logger.warning(f"Config path from preference doesn't exist: {config_path}")

    default_config = default_config_path()
    if default_config.exists():
        logger.info(f"Using default config location: {default_config}")
        return str(default_config)

    return None


def _validate_section(config: Dict[str, Any], name: str, config_path: str) -> None:
    section = config.get(name)
    if section is None:
        config[name] = {}
    elif not isinstance(section, dict):
        raise ConfigError(f"'{name}' section in config at {config_path} must be a mapping")


def _validate_authentication(auth: Any, config_path: str) -> None:
    if not isinstance(auth, dict):
        raise ConfigError(f"'authentication' section in config at {config_path} must be a mapping")

    if auth.get("type") != "service_account":
        raise ConfigError(
            f"Unsupported authentication type: {auth.get('type')}\n"
            f"Only 'service_account' is supported."
        )

    service_account_path = auth.get("service_account_path")
    if not service_account_path:
        raise ConfigError(
            "Missing 'authentication.service_account_path' in config\n"
            "Please specify the absolute path to your service account JSON file."
        )

    if not os.path.exists(service_account_path):
        raise ConfigError(
            f"Service account file not found at: {service_account_path}\n"
            f"Please ensure the file exists or update the path in {config_path}"
        )

    if not os.path.isfile(service_account_path):
        raise ConfigError(f"Service account path is not a file: {service_account_path}")


def load_config() -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    The file is optional; without one the defaults select the GCP backend with
    the project taken from the GCP_PROJECT environment variable.

    Returns:
        Dict with keys:
        - backend: "gcp" or "aws"
        - gcp: dict, optionally with project_id
        - aws: dict, optionally with region
        - authentication: optional dict with type and service_account_path

    Raises:
        ConfigError: If the config file is unreadable or invalid
    """
    config_path = _get_config_path()
    if config_path is None:
        logger.debug("No config file found, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    if config is None:
        raise ConfigError(f"Config file at {config_path} is empty")

    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must contain a mapping")

    backend = config.setdefault("backend", DEFAULT_CONFIG["backend"])
    if backend not in SUPPORTED_BACKENDS:
        raise ConfigError(
            f"Unsupported backend: {backend}\n"
            f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}"
        )

    _validate_section(config, "gcp", config_path)
    _validate_section(config, "aws", config_path)

    if "authentication" in config:
        _validate_authentication(config["authentication"], config_path)

    logger.info(f"Configuration loaded successfully from {config_path}")
    logger.debug(f"Using backend: {backend}")

    return config
