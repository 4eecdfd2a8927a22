"""
Utility functions for the setup wizard.
"""

from .file_store import FileStore, LocalFileStore
from .environment import EnvironmentReport, check_environment, check_google_cloud_sdk
from .messages import STATUS, format_status
from .process import run_interactive, run_aws_configure_sso, run_aws_sso_login

__all__ = [
    'FileStore',
    'LocalFileStore',
    'EnvironmentReport',
    'check_environment',
    'check_google_cloud_sdk',
    'STATUS',
    'format_status',
    'run_interactive',
    'run_aws_configure_sso',
    'run_aws_sso_login',
]
