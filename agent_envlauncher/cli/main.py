"""Admin CLI entrypoint for agent-envlauncher (envlaunchctl)."""
import sys
import argparse
import logging
from pathlib import Path

from .validators import validate_secret_name

VERSION = "0.1.0"

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)


def cmd_version(args):
    """Show version information."""
    print(f"agent-envlauncher {VERSION}")


def cmd_config_set_path(args):
    """Set config file path preference."""
    from agent_envlauncher.secrets.domains.preferences import set_preference

    config_path = Path(args.path).resolve()

    if not config_path.exists():
        print(f"Error: Config file does not exist: {config_path}", file=sys.stderr)
        sys.exit(1)

    if not config_path.is_file():
        print(f"Error: Path is not a file: {config_path}", file=sys.stderr)
        sys.exit(1)

    set_preference("config_path", str(config_path))
    print(f"Config path set to: {config_path}")


def cmd_config_show(args):
    """Show current config file path and its source."""
    from agent_envlauncher.secrets.domains.config_loader import default_config_path
    from agent_envlauncher.secrets.domains.preferences import get_preference

    config_path_pref = get_preference("config_path")

    if config_path_pref:
        config_path = Path(config_path_pref)
        if config_path.exists():
            print(f"Config path: {config_path}")
        else:
            print(f"Config path (from preference, but file not found): {config_path}")
        print("Source: preference")
        return

    default_config = default_config_path()
    print(f"Config path: {default_config}")
    if default_config.exists():
        print("Source: default")
    else:
        print("Source: default (file not found, built-in defaults in use)")


def cmd_config_clear(args):
    """Clear config path preference."""
    from agent_envlauncher.secrets.domains.config_loader import default_config_path
    from agent_envlauncher.secrets.domains.preferences import clear_preference

    clear_preference("config_path")
    print(f"Config path preference cleared. Will use default: {default_config_path()}")


def cmd_secrets_keys(args):
    """List the environment variable names a secret would set."""
    from agent_envlauncher.launcher.domains.errors import SecretStoreError
    from agent_envlauncher.secrets.workflows.secret_operations import get_secret_keys, resolve_backend

    backend = resolve_backend(args.backend)
    validate_secret_name(args.secret_name, backend)

    try:
        keys = get_secret_keys(args.secret_name, backend=backend)
    except SecretStoreError as e:
        print(f"Error: Secret '{args.secret_name}' could not be fetched: {e}", file=sys.stderr)
        sys.exit(1)

    if not args.quiet:
        print(f"Secret '{args.secret_name}' sets {len(keys)} variable(s):")
    for key in keys:
        print(key)
    sys.exit(0)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="envlaunchctl",
        description="agent-envlauncher admin CLI - configuration and secret inspection",
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (authentication, network, secret not found, etc.)
  2 - Usage error (invalid arguments, invalid secret name format, etc.)

Environment variables:
  ENVLAUNCH_BACKEND - Secret store backend, gcp or aws (overrides config file)
  GCP_PROJECT       - GCP project ID (overrides config file)

Configuration:
  Default location: ~/.config/agent-envlauncher/config.yml
  Custom path: Set with 'envlaunchctl config set-path <path>'
  View current: Run 'envlaunchctl config show'

To run a command with secrets, use: envlaunch <command_path> [args...] --key SECRET_NAME
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of agent-envlauncher"
    )

    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
        description="Manage agent-envlauncher configuration"
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    config_set_path_parser = config_subparsers.add_parser(
        "set-path",
        help="Set config file path",
        description="""
Set the configuration file path preference.

This stores the absolute path to your config file in:
~/.config/agent-envlauncher/preferences.json
        """
    )
    config_set_path_parser.add_argument("path", help="Path to config file")

    config_subparsers.add_parser(
        "show",
        help="Show current config path",
        description="Display the current configuration file path and its source."
    )

    config_subparsers.add_parser(
        "clear",
        help="Clear config path preference",
        description="Remove the config path preference and fall back to the default location."
    )

    secrets_parser = subparsers.add_parser(
        "secrets",
        help="Secret inspection",
        description="Inspect secrets without revealing their values"
    )
    secrets_subparsers = secrets_parser.add_subparsers(dest="secrets_command")

    keys_parser = secrets_subparsers.add_parser(
        "keys",
        help="List variable names a secret sets",
        description="""
Fetch a secret and print the environment variable names envlaunch would set
from it, one per line, sorted. Values are never printed.

A secret stored as a JSON object of strings sets one variable per key.
Any other secret sets a single variable named 'secret'.
        """
    )
    keys_parser.add_argument("secret_name", help="Name of the secret")
    keys_parser.add_argument(
        "--backend",
        choices=["gcp", "aws"],
        help="Secret store backend (defaults to ENVLAUNCH_BACKEND or the config file)"
    )
    keys_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Print only the key names"
    )

    return parser, config_parser, secrets_parser


def main(argv=None):
    """Admin CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (authentication, network, secret not found, etc.)
        2 - Usage errors (invalid arguments, invalid secret name format, etc.)
    """
    parser, config_parser, secrets_parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(2)

    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "config":
            if args.config_command == "set-path":
                cmd_config_set_path(args)
            elif args.config_command == "show":
                cmd_config_show(args)
            elif args.config_command == "clear":
                cmd_config_clear(args)
            else:
                config_parser.print_help()
                sys.exit(2)
        elif args.command == "secrets":
            if args.secrets_command == "keys":
                cmd_secrets_keys(args)
            else:
                secrets_parser.print_help()
                sys.exit(2)
        else:
            parser.print_help()
            sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
