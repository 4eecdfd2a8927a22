"""
Interactive prompts for the setup wizard.
"""

import getpass
from typing import Callable, Dict, List, Optional

from ..config import DEFAULT_REGION
from ..utils.validation import (
    validate_aws_account_id,
    validate_aws_region,
    validate_aws_role_name,
    validate_not_empty,
    validate_oidc_client_id,
    validate_profile_prefix,
    validate_role_arn,
    validate_url,
    validate_yes_no,
)

InputFunc = Callable[[str], str]
Validator = Callable[[str], Optional[str]]


class PromptSpec:
    """A single question asked on the terminal."""

    def __init__(self, message: str, default: Optional[str] = None,
                 validate: Optional[Validator] = None, secret: bool = False):
        self.message = message
        self.default = default
        self.validate = validate
        self.secret = secret

    def with_default(self, default: str) -> "PromptSpec":
        return PromptSpec(self.message, default, self.validate, self.secret)


def prompt(spec: PromptSpec, input_func: Optional[InputFunc] = None) -> str:
    """
    Ask a question until the answer passes validation.

    An empty answer takes the default, when there is one.
    """
    if input_func is None:
        input_func = getpass.getpass if spec.secret else input

    label = f"{spec.message} ({spec.default}): " if spec.default else f"{spec.message}: "

    while True:
        answer = input_func(label).strip()
        if not answer and spec.default is not None:
            answer = spec.default

        error = spec.validate(answer) if spec.validate else None
        if error is None:
            return answer
        print(f"  {error}")


def prompt_multiple(specs: Dict[str, PromptSpec],
                    input_func: Optional[InputFunc] = None) -> Dict[str, str]:
    """Ask several questions in order and return the answers by key."""
    return {key: prompt(spec, input_func) for key, spec in specs.items()}


def is_yes(answer: str) -> bool:
    return answer.strip().lower().startswith("y")


# Setup prompts
PREFIX = PromptSpec(
    "Enter a prefix for your AWS profiles (e.g., engineering, platform)",
    validate=validate_profile_prefix,
)
REGION = PromptSpec("Enter your AWS region", default=DEFAULT_REGION, validate=validate_aws_region)
SSO_START_URL = PromptSpec("Enter your AWS SSO start URL", validate=validate_url)
ACCOUNT_ID = PromptSpec("Enter your AWS account ID", validate=validate_aws_account_id)
ROLE_NAME = PromptSpec("Enter your AWS role name (permission set)", validate=validate_aws_role_name)

# Existing profile selection
USE_EXISTING = PromptSpec(
    "Do you want to use an existing SSO profile? (yes/no)",
    default="yes",
    validate=validate_yes_no,
)


def existing_profile_name(existing_profiles: List[str]) -> PromptSpec:
    def validate(value: str) -> Optional[str]:
        if value in existing_profiles:
            return None
        return f"Profile not found. Available profiles: {', '.join(existing_profiles)}"

    return PromptSpec("Enter the name of the existing SSO profile to use", validate=validate)


# OIDC prompts
USE_OIDC = PromptSpec(
    "Do you want to use OIDC federation instead of AWS SSO? (yes/no)",
    default="no",
    validate=validate_yes_no,
)
OIDC_PROVIDER = PromptSpec("Enter your OIDC provider", default="google", validate=validate_not_empty)
OIDC_CLIENT_ID = PromptSpec("Enter your OIDC client ID", validate=validate_oidc_client_id)
ROLE_ARN = PromptSpec("Enter the ARN of the AWS role to assume", validate=validate_role_arn)


def manual_sso_prompts() -> Dict[str, PromptSpec]:
    return {
        "prefix": PREFIX,
        "region": REGION,
        "sso_start_url": SSO_START_URL,
        "account_id": ACCOUNT_ID,
        "role_name": ROLE_NAME,
    }
