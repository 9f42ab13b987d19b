"""Merge decoded secrets on top of the inherited environment."""
from typing import Dict, Iterable, List, Mapping, Tuple

from .models import DecodedPairs, SecretReference


class EnvironmentBuilder:
    """Accumulates the child environment for a single run.

    Starts from a copy of the inherited environment snapshot. Each overlay
    overwrites existing names, so secrets win over inherited variables and
    later references win over earlier ones.
    """

    def __init__(self, base_env: Mapping[str, str]):
        self._env: Dict[str, str] = dict(base_env)

    def overlay(self, pairs: DecodedPairs) -> None:
        for key, value in pairs.items():
            self._env[key] = value

    def as_dict(self) -> Dict[str, str]:
        return dict(self._env)

    def entries(self) -> List[str]:
        """Return the environment as ``NAME=VALUE`` strings, one per name."""
        return [f"{key}={value}" for key, value in self._env.items()]


def build_environment(
    base_env: Mapping[str, str],
    resolved: Iterable[Tuple[SecretReference, DecodedPairs]],
) -> List[str]:
    """
    Build the child environment from a snapshot and resolved secrets.

    Args:
        base_env: Inherited environment snapshot
        resolved: (SecretReference, DecodedPairs) tuples in any order

    Returns:
        List of ``NAME=VALUE`` strings, applied in ascending reference position
    """
    builder = EnvironmentBuilder(base_env)
    for reference, pairs in sorted(resolved, key=lambda item: item[0].position):
        builder.overlay(pairs)
    return builder.entries()
