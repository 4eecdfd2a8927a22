"""
Environment checks run before setup.

The probe only reports. Deciding whether an error blocks setup is left to the
caller.
"""

import logging
import platform
import re
import shutil
import subprocess
from typing import List, Optional

logger = logging.getLogger(__name__)

AWS_CLI_INSTALL_URL = "https://aws.amazon.com/cli/"
GCLOUD_INSTALL_URL = "https://cloud.google.com/sdk/docs/install"

_AWS_CLI_VERSION_RE = re.compile(r"aws-cli/(\d+\.\d+\.\d+)")


class EnvironmentReport:
    """Result of an environment check."""

    def __init__(self, platform_name: str):
        self.platform = platform_name
        self.is_windows = platform_name == "Windows"
        self.is_mac = platform_name == "Darwin"
        self.is_linux = platform_name == "Linux"
        self.is_git_bash = False
        self.is_wsl = False
        self.aws_cli_version: Optional[str] = None
        self.jq_installed = False
        self.gcloud_installed = False
        self.warnings: List[str] = []
        self.errors: List[str] = []

    @property
    def ok(self) -> bool:
        return not self.errors


def _run(cmd: List[str]) -> Optional[str]:
    """Run a command and return its stdout, or None if it fails."""
    if shutil.which(cmd[0]) is None:
        return None
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=10)
    except (OSError, subprocess.SubprocessError):
        logger.debug("Command %s could not be run", cmd, exc_info=True)
        return None
    if result.returncode != 0:
        return None
    # aws-cli 1.x prints its version on stderr
    return result.stdout or result.stderr


def check_google_cloud_sdk() -> bool:
    """Check if the Google Cloud SDK (gcloud) is installed."""
    return _run(["gcloud", "--version"]) is not None


def check_environment(platform_name: Optional[str] = None) -> EnvironmentReport:
    """
    Check the environment for required tools.

    Args:
        platform_name: Override for ``platform.system()``

    Returns:
        EnvironmentReport with platform flags, tool presence, warnings and errors
    """
    report = EnvironmentReport(platform_name or platform.system())

    # Check if running in WSL or Git Bash
    if report.is_linux or report.is_windows:
        uname = (_run(["uname", "-a"]) or "").lower()
        if report.is_linux:
            report.is_wsl = "microsoft" in uname or "wsl" in uname
        else:
            report.is_git_bash = "mingw" in uname or "msys" in uname

    aws_version_output = _run(["aws", "--version"])
    if aws_version_output is None:
        report.errors.append(
            f"AWS CLI not found. Please install AWS CLI v2: {AWS_CLI_INSTALL_URL}"
        )
    else:
        match = _AWS_CLI_VERSION_RE.search(aws_version_output)
        if match:
            report.aws_cli_version = match.group(1)
            if int(report.aws_cli_version.split(".")[0]) < 2:
                report.warnings.append(
                    "AWS CLI version 1.x detected. Version 2.x is recommended for best experience."
                )
        else:
            report.warnings.append("AWS CLI version could not be determined.")

    # jq is used by the refresh scripts on Linux/macOS
    if not report.is_windows:
        report.jq_installed = _run(["jq", "--version"]) is not None
        if not report.jq_installed:
            report.warnings.append(
                "jq not found. It's recommended for JSON processing on Linux/macOS."
            )

    if report.is_windows and not report.is_git_bash:
        report.warnings.append(
            "On Windows, Git Bash is recommended for best experience with this tool."
        )

    # Only needed for Google OIDC, so no warning here
    report.gcloud_installed = check_google_cloud_sdk()

    logger.debug("Environment: platform=%s aws=%s jq=%s gcloud=%s",
                 report.platform, report.aws_cli_version,
                 report.jq_installed, report.gcloud_installed)
    return report
