"""Domain models for a launcher run."""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .errors import LauncherError

# Key/value pairs extracted from one secret payload
DecodedPairs = Dict[str, str]


@dataclass(frozen=True)
class CommandSpec:
    """Command to execute and its pass-through arguments."""
    path: str
    args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SecretReference:
    """A `--key NAME` occurrence; position orders resolution and precedence."""
    name: str
    position: int


@dataclass(frozen=True)
class ExecutionResult:
    """Terminal outcome of a run: success, or the first error encountered."""
    error: Optional[LauncherError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
