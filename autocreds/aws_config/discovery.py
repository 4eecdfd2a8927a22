"""
Discovery of SSO profiles in an existing AWS config.

Used to reuse a profile the user already has, or to pick up the profile that
``aws configure sso`` has just written.
"""

import logging
import re
from typing import List, Optional

from ..config import DEFAULT_REGION
from .parser import ConfigDocument, Section
from .templates import profile_header, sso_session_header

logger = logging.getLogger(__name__)

SSO_KEYS = ("sso_start_url", "sso_account_id", "sso_role_name", "sso_region", "sso_session")
_ACCOUNT_ID_RE = re.compile(r"^\d{12}$")


class DiscoveredProfile:
    """Details of an SSO profile found in the config file."""

    def __init__(self, prefix: str, region: str, account_id: str, role_name: str,
                 sso_start_url: Optional[str] = None):
        self.prefix = prefix
        self.region = region
        self.account_id = account_id
        self.role_name = role_name
        self.sso_start_url = sso_start_url

    def __repr__(self) -> str:
        return (f"DiscoveredProfile(prefix={self.prefix!r}, region={self.region!r}, "
                f"account_id={self.account_id!r}, role_name={self.role_name!r}, "
                f"sso_start_url={self.sso_start_url!r})")


def profile_names(document: ConfigDocument) -> List[str]:
    """Names of all ``profile <name>`` sections, in file order."""
    return [header[len("profile "):] for header in document if header.startswith("profile ")]


def is_sso_profile(section: Optional[Section]) -> bool:
    """A profile counts as SSO when any sso_* key has a value."""
    if section is None:
        return False
    return any(section.get(key) for key in SSO_KEYS)


def _looks_like_admin_profile(name: str) -> bool:
    # Names like "AdministratorAccess-123456789012" from aws configure sso
    return "administrator" in name.lower() and "-" in name


def find_sso_profiles(document: ConfigDocument) -> List[str]:
    """Names of the profiles that carry SSO settings."""
    return [name for name in profile_names(document)
            if is_sso_profile(document.get(profile_header(name)))]


def find_new_sso_profiles(before: ConfigDocument, after: ConfigDocument) -> List[str]:
    """
    Find SSO profiles that appear in ``after`` but not in ``before``.

    If no new profile looks like SSO, every profile in ``after`` whose name
    resembles the ``<Role>-<account>`` pattern is returned instead.
    """
    existing = set(profile_names(before))
    all_after = profile_names(after)
    new_profiles = [name for name in all_after if name not in existing]

    found = [name for name in new_profiles
             if is_sso_profile(after.get(profile_header(name))) or _looks_like_admin_profile(name)]

    if not found:
        for name in all_after:
            if _looks_like_admin_profile(name) and name not in found:
                found.append(name)

    return found


def resolve_sso_start_url(document: ConfigDocument, profile_name: str) -> Optional[str]:
    """
    Find the SSO start URL for a profile.

    Looks at the profile itself, then at the sso-session it references, then
    at any sso-session section, then at any other profile.
    """
    section = document.get(profile_header(profile_name))
    if section is not None:
        start_url = section.get("sso_start_url")
        if start_url:
            return start_url

        session_name = section.get("sso_session")
        if session_name:
            session = document.get(sso_session_header(session_name))
            if session is not None and session.get("sso_start_url"):
                return session.get("sso_start_url")
            logger.warning("Could not find sso-session %s in config", session_name)

    for header in document:
        if header.startswith("sso-session ") and document[header].get("sso_start_url"):
            logger.debug("Using SSO start URL from [%s]", header)
            return document[header].get("sso_start_url")

    for header in document:
        if header.startswith("profile ") and document[header].get("sso_start_url"):
            logger.debug("Using SSO start URL from [%s]", header)
            return document[header].get("sso_start_url")

    return None


def extract_profile_details(document: ConfigDocument,
                            profile_name: str) -> Optional[DiscoveredProfile]:
    """
    Extract the values needed for setup from an existing SSO profile.

    Missing account IDs and role names are guessed from the profile name
    (``AdministratorAccess-123456789012``). The guess splits on hyphens and is
    unreliable for names that contain more of them.

    Returns:
        DiscoveredProfile, or None when account ID or role name are unknown
    """
    section = document.get(profile_header(profile_name))
    if section is None:
        return None

    region = section.get("region") or section.get("sso_region") or DEFAULT_REGION
    account_id = section.get("sso_account_id")
    role_name = section.get("sso_role_name")

    if not account_id and "-" in profile_name:
        candidate = profile_name.split("-")[-1]
        if _ACCOUNT_ID_RE.match(candidate):
            account_id = candidate
            logger.info("Extracted account ID from profile name: %s", account_id)

    if not role_name and "-" in profile_name:
        role_name = profile_name.split("-")[0]
        logger.info("Extracted role name from profile name: %s", role_name)

    if not account_id or not role_name:
        return None

    return DiscoveredProfile(
        prefix=profile_name,
        region=region,
        account_id=account_id,
        role_name=role_name,
        sso_start_url=resolve_sso_start_url(document, profile_name),
    )
