import subprocess
import pytest
from unittest.mock import patch, MagicMock
from autocreds.utils.environment import (
    AWS_CLI_INSTALL_URL,
    EnvironmentReport,
    check_environment,
    check_google_cloud_sdk,
)


def fake_tools(outputs):
    """
    Build which/run stand-ins for a set of installed tools.

    Args:
        outputs: Mapping of tool name to the stdout it prints
    """
    def which(name):
        return f"/usr/bin/{name}" if name in outputs else None

    def run(cmd, **kwargs):
        return MagicMock(returncode=0, stdout=outputs[cmd[0]], stderr="")

    return which, run


def check_with(outputs, platform_name):
    which, run = fake_tools(outputs)
    with patch('autocreds.utils.environment.shutil.which', side_effect=which), \
            patch('autocreds.utils.environment.subprocess.run', side_effect=run):
        return check_environment(platform_name)


def test_linux_with_all_tools():
    """Test a Linux machine with every tool installed."""
    report = check_with({
        "uname": "Linux host 6.1.0 x86_64 GNU/Linux",
        "aws": "aws-cli/2.15.0 Python/3.11.6 Linux/6.1.0",
        "jq": "jq-1.7",
        "gcloud": "Google Cloud SDK 460.0.0",
    }, "Linux")

    assert report.ok
    assert report.is_linux
    assert not report.is_wsl
    assert report.aws_cli_version == "2.15.0"
    assert report.jq_installed
    assert report.gcloud_installed
    assert report.warnings == []


def test_missing_aws_cli_is_error():
    """Test that a missing AWS CLI blocks setup."""
    report = check_with({"uname": "Darwin", "jq": "jq-1.7"}, "Darwin")

    assert not report.ok
    assert report.errors == [f"AWS CLI not found. Please install AWS CLI v2: {AWS_CLI_INSTALL_URL}"]
    assert not report.gcloud_installed


def test_aws_cli_v1_and_missing_jq_warn():
    """Test warnings for AWS CLI v1 and a missing jq."""
    report = check_with({"uname": "Linux", "aws": "aws-cli/1.29.0 Python/3.9"}, "Linux")

    assert report.ok
    assert report.aws_cli_version == "1.29.0"
    assert any("1.x" in warning for warning in report.warnings)
    assert any(warning.startswith("jq not found") for warning in report.warnings)


def test_unparseable_aws_version_warns():
    """Test that an unknown version string is only a warning."""
    report = check_with({"uname": "Linux", "aws": "something else", "jq": "jq-1.6"}, "Linux")

    assert report.ok
    assert report.aws_cli_version is None
    assert report.warnings == ["AWS CLI version could not be determined."]


def test_wsl_detection():
    """Test detecting WSL from uname."""
    report = check_with({
        "uname": "Linux host 5.15.90.1-microsoft-standard-WSL2",
        "aws": "aws-cli/2.15.0",
        "jq": "jq-1.7",
    }, "Linux")

    assert report.is_wsl


def test_windows_without_git_bash():
    """Test the Git Bash recommendation on Windows."""
    report = check_with({"aws": "aws-cli/2.15.0 Python/3.11 Windows/10"}, "Windows")

    assert report.is_windows
    assert not report.is_git_bash
    assert not report.jq_installed
    assert report.warnings == ["On Windows, Git Bash is recommended for best experience with this tool."]


def test_windows_with_git_bash():
    """Test detecting Git Bash from uname."""
    report = check_with({
        "uname": "MINGW64_NT-10.0-19045 host 3.4.9 x86_64 Msys",
        "aws": "aws-cli/2.15.0",
    }, "Windows")

    assert report.is_git_bash
    assert report.warnings == []


@patch('autocreds.utils.environment.subprocess.run')
@patch('autocreds.utils.environment.shutil.which')
def test_failing_command_counts_as_missing(mock_which, mock_run):
    """Test that a non-zero exit or timeout is treated as not installed."""
    mock_which.return_value = "/usr/bin/gcloud"

    mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="boom")
    assert check_google_cloud_sdk() is False

    mock_run.side_effect = subprocess.TimeoutExpired(["gcloud"], 10)
    assert check_google_cloud_sdk() is False


def test_report_ok_property():
    """Test that errors make a report not ok."""
    report = EnvironmentReport("Linux")
    assert report.ok

    report.errors.append("broken")
    assert not report.ok
