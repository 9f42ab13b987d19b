"""Decode raw secret payloads into environment key/value pairs."""
import json

from agent_envlauncher.launcher.domains.models import DecodedPairs

FALLBACK_KEY = "secret"


def decode_secret(raw: str) -> DecodedPairs:
    """
    Decode a secret payload into key/value pairs.

    A payload that is a JSON object with only string values is returned as-is.
    Anything else (plain text, empty string, arrays, nested or numeric values)
    is exposed whole under the single key ``secret``.

    Args:
        raw: Secret payload as returned by the secret store

    Returns:
        Dict of environment variable names to values
    """
    try:
        parsed = json.loads(raw)
    except (ValueError, TypeError, RecursionError):
        return {FALLBACK_KEY: raw}

    if not isinstance(parsed, dict):
        return {FALLBACK_KEY: raw}
    if not all(isinstance(value, str) for value in parsed.values()):
        return {FALLBACK_KEY: raw}

    return dict(parsed)
