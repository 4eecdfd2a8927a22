"""
AWS Profile Store

This module reads and writes profiles in the AWS config file. Every write
goes through the same cycle: read the whole file, parse it, compute the new
document with ``upsert_profile``, serialize it and overwrite the file. It also
lists the profiles a config file defines.
"""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional, Union

from ..utils.file_store import FileStore
from .merge import upsert_profile
from .parser import ConfigDocument, Section, parse_aws_config, stringify_aws_config
from .templates import (
    auto_refresh_profile_sections,
    default_session_name,
    oidc_profile_sections,
    sso_profile_sections,
)

__all__ = [
    'load_config',
    'write_profile',
    'create_sso_profile',
    'create_oidc_profile',
    'create_auto_refresh_profile',
    'list_profiles',
    'get_current_profile',
    'ProfileInfo',
]

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ProfileInfo:
    """Contains information about an AWS profile."""
    def __init__(self, name: str, region: Optional[str] = None,
                 kind: Optional[str] = None, is_default: bool = False,
                 is_active: bool = False, account_id: Optional[str] = None,
                 role_name: Optional[str] = None):
        self.name = name
        self.region = region
        self.kind = kind  # "sso", "oidc", "credential_process", "role", "static"
        self.is_default = is_default
        self.is_active = is_active
        self.account_id = account_id
        self.role_name = role_name

    @property
    def is_sso(self) -> bool:
        return self.kind == "sso"

    def __str__(self) -> str:
        """Return string representation of the profile info."""
        status = []
        if self.is_active:
            status.append("ACTIVE")
        if self.is_default:
            status.append("DEFAULT")

        status_str = f" ({', '.join(status)})" if status else ""
        region_str = f" - {self.region}" if self.region else ""
        account_str = f" - Account: {self.account_id}" if self.account_id else ""

        identity_info = []
        if self.kind:
            identity_info.append(self.kind)
        if self.role_name:
            identity_info.append(self.role_name)

        identity_str = f" [{', '.join(identity_info)}]" if identity_info else ""

        return f"{self.name}{region_str}{account_str}{identity_str}{status_str}"


def load_config(store: FileStore, config_path: PathLike) -> ConfigDocument:
    """
    Read and parse the AWS config file.

    Args:
        store: File access implementation
        config_path: Path to the config file

    Returns:
        The parsed document, or an empty one if the file does not exist
    """
    if not store.exists(config_path):
        logger.debug("No config file at %s, starting from an empty document", config_path)
        return ConfigDocument()
    return parse_aws_config(store.read_text(config_path))


def write_profile(store: FileStore, config_path: PathLike, section_header: str,
                  pairs: Mapping[str, str], force: bool = False,
                  companion_sections: Optional[Mapping[str, Mapping[str, str]]] = None
                  ) -> ConfigDocument:
    """
    Write one profile section to the config file.

    Raises:
        ProfileExistsError: The profile exists and ``force`` is False.
            Nothing is written in that case.
    """
    document = load_config(store, config_path)
    updated = upsert_profile(document, section_header, pairs, force,
                             companion_sections=companion_sections)
    store.write_text(config_path, stringify_aws_config(updated))
    logger.info("Wrote [%s] to %s", section_header, config_path)
    return updated


def _write_sections(store: FileStore, config_path: PathLike, sections, force: bool
                    ) -> ConfigDocument:
    # The last entry of a template is the guarded profile section
    headers = list(sections)
    target = headers[-1]
    companions = {header: sections[header] for header in headers[:-1]}
    return write_profile(store, config_path, target, sections[target], force,
                         companion_sections=companions)


def create_sso_profile(store: FileStore, config_path: PathLike, profile_name: str,
                       region: str, sso_start_url: str, account_id: str,
                       role_name: str, force: bool = False,
                       session_name: Optional[str] = None) -> ConfigDocument:
    """
    Create or update an SSO profile and its sso-session section.

    Args:
        store: File access implementation
        config_path: Path to the AWS config file
        profile_name: Name of the profile (e.g. "engineering-sso")
        region: AWS region, also used as SSO region
        sso_start_url: SSO portal start URL
        account_id: AWS account ID
        role_name: Permission set / role name
        force: Overwrite an existing profile
        session_name: sso-session name (defaults to "<profile_name>-session")

    Returns:
        The document that was written
    """
    sections = sso_profile_sections(
        profile_name,
        region,
        session_name or default_session_name(profile_name),
        account_id,
        role_name,
        sso_start_url,
    )
    return _write_sections(store, config_path, sections, force)


def create_oidc_profile(store: FileStore, config_path: PathLike, profile_name: str,
                        region: str, role_arn: str, oidc_provider: str,
                        oidc_client_id: str, force: bool = False) -> ConfigDocument:
    """Create or update an OIDC federation profile."""
    sections = oidc_profile_sections(profile_name, region, role_arn, oidc_provider, oidc_client_id)
    return _write_sections(store, config_path, sections, force)


def create_auto_refresh_profile(store: FileStore, config_path: PathLike, profile_name: str,
                                region: str, script_path: PathLike, force: bool = False,
                                platform: Optional[str] = None) -> ConfigDocument:
    """Create or update the profile whose credential_process runs the refresh script."""
    sections = auto_refresh_profile_sections(profile_name, region, str(script_path), platform)
    return _write_sections(store, config_path, sections, force)


def get_current_profile() -> Optional[str]:
    """
    Get the name of the currently active AWS profile.

    Returns:
        Name of the active profile or None if using default credentials
    """
    # Check AWS_PROFILE environment variable
    profile = os.environ.get("AWS_PROFILE")
    if profile:
        return profile

    # Check if AWS_DEFAULT_PROFILE is set
    profile = os.environ.get("AWS_DEFAULT_PROFILE")
    if profile:
        return profile

    return None


def _profile_kind(section: Section) -> Optional[str]:
    if "sso_session" in section or "sso_start_url" in section:
        return "sso"
    if "web_identity_provider" in section:
        return "oidc"
    if "credential_process" in section:
        return "credential_process"
    if "role_arn" in section:
        return "role"
    if "aws_access_key_id" in section:
        return "static"
    return None


def _account_from_role_arn(role_arn: str) -> Optional[str]:
    # Format: arn:aws:iam::ACCOUNT:role/ROLE
    parts = role_arn.split(":")
    if len(parts) >= 5 and parts[4]:
        return parts[4]
    return None


def list_profiles(store: FileStore, config_path: PathLike,
                  current_profile: Optional[str] = None) -> List[ProfileInfo]:
    """
    List all AWS profiles defined in the config file.

    Args:
        store: File access implementation
        config_path: Path to the AWS config file
        current_profile: Name of the active profile (read from the
            environment when None)

    Returns:
        List of ProfileInfo objects in file order
    """
    if current_profile is None:
        current_profile = get_current_profile()

    document = load_config(store, config_path)
    profiles = []

    for header in document:
        if header == "default":
            name = "default"
        elif header.startswith("profile "):
            name = header[len("profile "):]
        else:
            # Skip non-profile sections like sso-session
            continue

        section = document[header]
        kind = _profile_kind(section)

        account_id = section.get("sso_account_id")
        role_name = section.get("sso_role_name")

        # If it's a role assumption profile, get the role info
        role_arn = section.get("role_arn")
        if role_arn:
            account_id = account_id or _account_from_role_arn(role_arn)
            parts = role_arn.split("/")
            if len(parts) >= 2:
                role_name = role_name or parts[1]

        profiles.append(ProfileInfo(
            name=name,
            region=section.get("region") or section.get("sso_region"),
            kind=kind,
            is_default=(name == "default"),
            is_active=(current_profile == name),
            account_id=account_id,
            role_name=role_name,
        ))

    return profiles
