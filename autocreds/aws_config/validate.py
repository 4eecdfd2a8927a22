"""
Credential validation for configured profiles.
"""

import logging
from typing import Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


def validate_profile(profile_name: Optional[str] = None) -> Tuple[bool, str]:
    """
    Validate AWS credentials for a profile.

    Resolves credentials the same way the AWS CLI does, so an auto-credentials
    profile runs its refresh script here.

    Args:
        profile_name: Name of the profile to validate (uses current if None)

    Returns:
        Tuple of (success, message)
    """
    try:
        session = boto3.Session(profile_name=profile_name)
        identity = session.client("sts").get_caller_identity()
    except (BotoCoreError, ClientError) as e:
        logger.debug("Validation of %s failed", profile_name or "default", exc_info=True)
        return False, f"Credential validation failed: {str(e)}"

    arn = identity.get("Arn", "unknown")
    account = identity.get("Account", "unknown")
    return True, f"Credentials are valid ({arn}, account {account})"
