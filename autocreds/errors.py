"""
Error types raised by autocreds.

Core functions raise these and never catch them. The CLI entry point is the
only place that turns them into exit codes.
"""

from typing import List, Optional


class AutoCredsError(Exception):
    """Base class for every error autocreds raises on purpose."""


class ProfileExistsError(AutoCredsError):
    """A profile section is already present and overwriting was not requested."""

    def __init__(self, section_header: str):
        self.section_header = section_header
        if section_header.startswith("profile "):
            self.profile_name = section_header[len("profile "):]
        else:
            self.profile_name = section_header
        super().__init__(
            f"Profile {self.profile_name} already exists. Use --force to overwrite."
        )


class ScriptExistsError(AutoCredsError):
    """A refresh script is already present and overwriting was not requested."""

    def __init__(self, path: str):
        self.path = str(path)
        super().__init__(f"Script {self.path} already exists. Use --force to overwrite.")


class ExternalProcessFailure(AutoCredsError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: List[str], returncode: Optional[int] = None,
                 reason: Optional[str] = None):
        self.command = list(command)
        self.returncode = returncode
        self.reason = reason
        cmd = " ".join(self.command)
        if reason:
            message = f"{cmd} failed: {reason}"
        else:
            message = f"{cmd} exited with code {returncode}"
        super().__init__(message)


class EnvironmentCheckError(AutoCredsError):
    """The environment probe found problems that block setup."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Environment check failed: " + "; ".join(self.errors))


class MissingDependencyError(AutoCredsError):
    """A tool needed by the chosen setup path is not installed."""

    def __init__(self, tool: str, install_url: Optional[str] = None):
        self.tool = tool
        self.install_url = install_url
        message = f"{tool} is required but was not found"
        if install_url:
            message += f". Install it from: {install_url}"
        super().__init__(message)


class UnsupportedProviderError(AutoCredsError):
    """No refresh script exists for the requested OIDC provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f"OIDC provider '{provider}' is not supported for credential refresh "
            f"(supported: google)"
        )


class InvalidOptionError(AutoCredsError):
    """A command-line option value failed validation."""

    def __init__(self, option: str, reason: str):
        self.option = option
        self.reason = reason
        super().__init__(f"Invalid value for {option}: {reason}")
