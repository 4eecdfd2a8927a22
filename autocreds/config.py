"""
Runtime configuration.

Paths follow the AWS CLI conventions: the config file lives in ``~/.aws`` unless
``AWS_CONFIG_FILE`` points somewhere else. Refresh scripts go next to it by
default, or into ``AUTOCREDS_SCRIPT_DIR`` / ``--script-path``.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

CONFIG_FILE_ENV = "AWS_CONFIG_FILE"
SCRIPT_DIR_ENV = "AUTOCREDS_SCRIPT_DIR"
DEFAULT_REGION = "us-east-1"


def get_aws_dir() -> Path:
    """Get the path to the ~/.aws directory."""
    return Path.home() / ".aws"


def get_aws_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Get the path to the AWS config file."""
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_FILE_ENV)
    if override:
        return Path(os.path.expanduser(override))
    return get_aws_dir() / "config"


def expand_script_dir(script_path: Optional[str]) -> Optional[Path]:
    """Expand a leading ``~`` in a user-supplied script directory."""
    if not script_path:
        return None
    return Path(os.path.expanduser(script_path))


class Settings:
    """Resolved locations used by a setup run."""

    def __init__(self, config_path: Path, script_dir: Path):
        self.config_path = Path(config_path)
        self.script_dir = Path(script_dir)

    @classmethod
    def from_env(cls, script_path: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Resolve settings from the environment and CLI options.

        Args:
            script_path: Directory given on the command line, if any
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Settings with absolute, user-expanded paths
        """
        env = os.environ if environ is None else environ
        script_dir = (expand_script_dir(script_path)
                      or expand_script_dir(env.get(SCRIPT_DIR_ENV))
                      or get_aws_dir())
        return cls(get_aws_config_path(env), script_dir)

    def __repr__(self) -> str:
        return f"Settings(config_path={self.config_path!s}, script_dir={self.script_dir!s})"
