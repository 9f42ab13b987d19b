"""Split a raw argument list into a command and its secret references."""
from typing import List, Sequence, Tuple

from .errors import UsageError
from .models import CommandSpec, SecretReference

KEY_FLAG = "--key"


def parse_arguments(tokens: Sequence[str]) -> Tuple[CommandSpec, List[SecretReference]]:
    """
    Parse ``[program, command_path, ...]`` into a command and secret references.

    Every ``--key NAME`` pair after the command path becomes a SecretReference,
    numbered in the order it appears. All other tokens, including a trailing
    ``--key`` with nothing after it, are passed to the command unchanged.

    Args:
        tokens: Full argument list; index 0 is the program name and is ignored

    Returns:
        Tuple of (CommandSpec, ordered list of SecretReference)

    Raises:
        UsageError: If no command path was given
    """
    if len(tokens) < 2:
        raise UsageError()

    path = tokens[1]
    args: List[str] = []
    references: List[SecretReference] = []

    i = 2
    while i < len(tokens):
        token = tokens[i]
        if token == KEY_FLAG and i + 1 < len(tokens):
            references.append(SecretReference(name=tokens[i + 1], position=len(references)))
            i += 2
        else:
            args.append(token)
            i += 1

    return CommandSpec(path=path, args=tuple(args)), references
