"""
AWS config profile templates.

Each function returns the sections a profile shape needs as an ordered
``{header: {key: value}}`` mapping. The guarded profile section is always the
last entry.
"""

import platform as _platform
from typing import Dict, Optional

SSO_SUFFIX = "sso"
OIDC_SUFFIX = "oidc"
AUTO_CREDENTIALS_SUFFIX = "auto-credentials"

GOOGLE_WEB_IDENTITY_PROVIDER = "accounts.google.com"

Sections = Dict[str, Dict[str, str]]


def profile_header(profile_name: str) -> str:
    """Section header for a named profile ("default" has no prefix)."""
    if profile_name == "default":
        return "default"
    return f"profile {profile_name}"


def sso_session_header(session_name: str) -> str:
    return f"sso-session {session_name}"


def profile_name_for(prefix: str, suffix: str) -> str:
    """Build ``<prefix>-sso``, ``<prefix>-oidc`` or ``<prefix>-auto-credentials``."""
    return f"{prefix}-{suffix}"


def default_session_name(profile_name: str) -> str:
    return f"{profile_name}-session"


def sso_profile_sections(profile_name: str, region: str, session_name: str,
                         account_id: str, role_name: str, start_url: str) -> Sections:
    """
    Generate an SSO profile backed by an ``sso-session`` section.

    Args:
        profile_name: Name of the profile
        region: AWS region, also used as the SSO region
        session_name: Name of the sso-session section
        account_id: AWS account ID
        role_name: Permission set / role name
        start_url: SSO portal start URL

    Returns:
        Sections for the session and the profile, in that order
    """
    return {
        sso_session_header(session_name): {
            "sso_start_url": start_url,
            "sso_region": region,
        },
        profile_header(profile_name): {
            "sso_session": session_name,
            "sso_account_id": account_id,
            "sso_role_name": role_name,
            "region": region,
        },
    }


def web_identity_provider_for(oidc_provider: str) -> str:
    """Map a provider name to the ``web_identity_provider`` value."""
    if oidc_provider.lower() == "google":
        return GOOGLE_WEB_IDENTITY_PROVIDER
    return oidc_provider


def oidc_profile_sections(profile_name: str, region: str, role_arn: str,
                          oidc_provider: str, client_id: str) -> Sections:
    """
    Generate a profile that federates through an OIDC identity provider.

    Args:
        profile_name: Name of the profile
        region: AWS region
        role_arn: ARN of the role assumed with the web identity token
        oidc_provider: "google" or the provider host
        client_id: OAuth client ID used as the token audience

    Returns:
        Sections for the profile
    """
    return {
        profile_header(profile_name): {
            "role_arn": role_arn,
            "web_identity_provider": web_identity_provider_for(oidc_provider),
            "client_id": client_id,
            "region": region,
        },
    }


def format_script_path(script_path: str, platform: Optional[str] = None) -> str:
    """Format a script path for use inside ``credential_process``."""
    system = platform or _platform.system()
    if system == "Windows":
        # Windows needs doubled backslashes in the config value
        return str(script_path).replace("/", "\\\\")
    return str(script_path)


def auto_refresh_profile_sections(profile_name: str, region: str, script_path: str,
                                  platform: Optional[str] = None) -> Sections:
    """
    Generate the profile that calls the refresh script as a credential process.

    Args:
        profile_name: Name of the profile
        region: AWS region
        script_path: Location of the generated refresh script
        platform: Platform name as returned by ``platform.system()``
            (detected when None)

    Returns:
        Sections for the profile
    """
    formatted = format_script_path(script_path, platform)
    return {
        profile_header(profile_name): {
            "credential_process": f"bash {formatted} --json",
            "region": region,
        },
    }
