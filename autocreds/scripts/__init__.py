"""
Credential refresh scripts used as ``credential_process`` commands.
"""

from .templates import (
    ScriptKind,
    render_script,
    render_sso_refresh_script,
    render_google_oidc_refresh_script,
    refresh_script_name
)
from .writer import create_refresh_script

__all__ = [
    'ScriptKind',
    'render_script',
    'render_sso_refresh_script',
    'render_google_oidc_refresh_script',
    'refresh_script_name',
    'create_refresh_script',
]
