#!/usr/bin/env python3
"""
AWS Auto-Credentials CLI

A command-line utility that sets up AWS profiles which refresh their own
credentials, and lists or validates the profiles in your AWS config.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .aws_config.profiles import get_current_profile, list_profiles
from .aws_config.validate import validate_profile
from .commands.setup import SetupOptions, setup_command
from .config import get_aws_config_path
from .errors import AutoCredsError
from .utils.file_store import LocalFileStore
from .utils.log import setup_logger
from .utils.messages import STATUS

COMMANDS = ("setup", "list", "validate")
GLOBAL_FLAGS = ("--verbose", "-v")
HELP_FLAGS = ("-h", "--help", "--version")


def format_profile_list(profiles):
    """Format profiles for display."""
    if not profiles:
        return "No AWS profiles found."

    output = []
    for p in profiles:
        marker = "→ " if p.is_active else "  "
        output.append(f"{marker}{p}")

    return "\n".join(output)


def handle_setup(args) -> int:
    """Handle the setup command."""
    options = SetupOptions(
        force=args.force,
        dry_run=args.dry_run,
        script_path=args.script_path,
        manual_setup=args.manual_setup,
        skip_login=args.skip_login,
        oidc_provider=args.oidc_provider,
        oidc_client_id=args.oidc_client_id,
        role_arn=args.role_arn,
        verify=args.verify,
    )
    setup_command(options)
    return 0


def handle_list(args) -> int:
    """Handle the list command."""
    config_path = get_aws_config_path()
    profiles = list_profiles(LocalFileStore(), config_path)
    if not args.all:
        profiles = [p for p in profiles if p.kind in ("sso", "oidc", "credential_process")]

    print(f"AWS Profiles ({config_path}):")
    print(format_profile_list(profiles))

    current = get_current_profile()
    if current:
        print(f"\nActive profile: {current}")
    else:
        print("\nNo profile explicitly set (using default)")
    return 0


def handle_validate(args) -> int:
    """Handle the validate command."""
    success, message = validate_profile(args.profile)

    if success:
        print(f"{STATUS['SUCCESS']} {message}")
        return 0
    print(f"{STATUS['ERROR']} {message}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aws-auto-credentials",
        description="CLI tool to automate AWS SSO credential refresh setup"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print diagnostic logging to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Also accepted after the subcommand; SUPPRESS keeps a value given before it
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS,
                        help="Print diagnostic logging to stderr")

    # Setup command
    setup_parser = subparsers.add_parser(
        "setup", parents=[common], help="Set up AWS SSO auto-credentials profiles and scripts")
    setup_parser.add_argument("--force", action="store_true",
                              help="Overwrite existing profiles or scripts without prompt")
    setup_parser.add_argument("--dry-run", action="store_true",
                              help="Show planned changes without making them")
    setup_parser.add_argument("--script-path",
                              help="Custom location for refresh script (default: ~/.aws/ or $AUTOCREDS_SCRIPT_DIR)")
    setup_parser.add_argument("--manual-setup", action="store_true",
                              help="Skip AWS SSO configuration and manually enter profile details")
    setup_parser.add_argument("--skip-login", action="store_true",
                              help="Skip automatic AWS SSO login after setup")
    setup_parser.add_argument("--oidc-provider",
                              help="Use OIDC federation with this provider (e.g. google)")
    setup_parser.add_argument("--oidc-client-id", help="OIDC client ID")
    setup_parser.add_argument("--role-arn", help="ARN of the AWS role to assume with OIDC")
    setup_parser.add_argument("--verify", action="store_true",
                              help="Validate the auto-credentials profile after setup")
    setup_parser.set_defaults(func=handle_setup)

    # List command
    list_parser = subparsers.add_parser("list", parents=[common],
                                        help="List AWS profiles in the config file")
    list_parser.add_argument("--all", "-a", action="store_true",
                             help="Include profiles that do not refresh credentials")
    list_parser.set_defaults(func=handle_list)

    # Validate command
    validate_parser = subparsers.add_parser("validate", parents=[common],
                                            help="Validate AWS credentials for a profile")
    validate_parser.add_argument("--profile", help="Profile to validate (uses current if not specified)")
    validate_parser.set_defaults(func=handle_validate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, run the command and map failures to an exit code.

    ``setup`` is the default command when none is given.
    """
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)

    # Skip leading global flags, then default to setup
    index = 0
    while index < len(argv) and argv[index] in GLOBAL_FLAGS:
        index += 1
    if index == len(argv) or argv[index] not in COMMANDS + HELP_FLAGS:
        argv.insert(index, "setup")

    args = parser.parse_args(argv)

    if args.verbose:
        setup_logger(level=logging.DEBUG)
    else:
        setup_logger()

    try:
        return args.func(args)
    except AutoCredsError as e:
        print(f"{STATUS['ERROR']} {e}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"{STATUS['ERROR']} File error: {e}")
        return 1
    except KeyboardInterrupt:
        print(f"\n{STATUS['ERROR']} Setup cancelled")
        return 130


if __name__ == "__main__":
    sys.exit(main())
