"""
Validators for user input.

Each validator returns None for valid input and an error message otherwise.
"""

import re
from typing import Optional
from urllib.parse import urlparse

_REGION_RE = re.compile(r"^[a-z]{2}-[a-z]+-\d{1,2}$")
_ACCOUNT_ID_RE = re.compile(r"^\d{12}$")
_ROLE_NAME_INVALID_RE = re.compile(r"[^a-zA-Z0-9+=,.@_-]")
_PREFIX_RE = re.compile(r"^[a-zA-Z0-9-]+$")
_CLIENT_ID_RE = re.compile(r"^[a-zA-Z0-9._-]+$")
_ROLE_ARN_RE = re.compile(r"^arn:aws[a-zA-Z-]*:iam::\d{12}:role/[\w+=,.@/-]+$")


def validate_aws_region(value: str) -> Optional[str]:
    if not value.strip():
        return "AWS region cannot be empty"
    if not _REGION_RE.match(value):
        return "Invalid AWS region format (e.g., us-east-1, eu-west-2)"
    return None


def validate_aws_account_id(value: str) -> Optional[str]:
    if not value.strip():
        return "AWS account ID cannot be empty"
    if not _ACCOUNT_ID_RE.match(value):
        return "AWS account ID must be 12 digits"
    return None


def validate_aws_role_name(value: str) -> Optional[str]:
    if not value.strip():
        return "AWS role name cannot be empty"
    if len(value) > 64:
        return "AWS role name cannot exceed 64 characters"
    if _ROLE_NAME_INVALID_RE.search(value):
        return "AWS role name contains invalid characters"
    return None


def validate_profile_prefix(value: str) -> Optional[str]:
    if not value.strip():
        return "Prefix cannot be empty"
    if not _PREFIX_RE.match(value):
        return "Prefix can only contain letters, numbers, and hyphens"
    return None


def validate_url(value: str) -> Optional[str]:
    if not value.strip():
        return "SSO start URL cannot be empty"
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        return "Please enter a valid URL"
    return None


def validate_role_arn(value: str) -> Optional[str]:
    if not value.strip():
        return "Role ARN cannot be empty"
    if not _ROLE_ARN_RE.match(value):
        return "Invalid role ARN (e.g., arn:aws:iam::123456789012:role/MyRole)"
    return None


def validate_oidc_client_id(value: str) -> Optional[str]:
    if not value.strip():
        return "OIDC client ID cannot be empty"
    if not _CLIENT_ID_RE.match(value):
        return "OIDC client ID can only contain letters, numbers, dots, underscores, and hyphens"
    return None


def validate_not_empty(value: str) -> Optional[str]:
    if not value.strip():
        return "Value cannot be empty"
    return None


def validate_yes_no(value: str) -> Optional[str]:
    if value.strip().lower() in ("yes", "no", "y", "n"):
        return None
    return "Please enter yes or no"
