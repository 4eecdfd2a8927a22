"""
Runs the interactive AWS CLI commands used during setup.
"""

import logging
import subprocess
from typing import List

from ..errors import ExternalProcessFailure

logger = logging.getLogger(__name__)


def run_interactive(cmd: List[str]) -> None:
    """
    Run a command attached to the current terminal and wait for it.

    There is no timeout: browser based logins wait on the user.

    Raises:
        ExternalProcessFailure: The command is missing or exits non-zero
    """
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd)
    except OSError as e:
        raise ExternalProcessFailure(cmd, reason=str(e)) from e

    if result.returncode != 0:
        raise ExternalProcessFailure(cmd, result.returncode)


def run_aws_configure_sso() -> None:
    """Run ``aws configure sso``."""
    run_interactive(["aws", "configure", "sso"])


def run_aws_sso_login(profile_name: str) -> None:
    """Run ``aws sso login`` for a profile. Opens a browser window."""
    run_interactive(["aws", "sso", "login", "--profile", profile_name])
