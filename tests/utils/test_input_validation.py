import pytest
from autocreds.utils.validation import (
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


@pytest.mark.parametrize("region", ["us-east-1", "eu-west-2", "ap-southeast-1", "eu-central-1"])
def test_valid_regions(region):
    """Test well-formed region names."""
    assert validate_aws_region(region) is None


@pytest.mark.parametrize("region,message", [
    ("", "AWS region cannot be empty"),
    ("US-EAST-1", "Invalid AWS region format (e.g., us-east-1, eu-west-2)"),
    ("us-east", "Invalid AWS region format (e.g., us-east-1, eu-west-2)"),
])
def test_invalid_regions(region, message):
    """Test malformed region names."""
    assert validate_aws_region(region) == message


def test_account_id():
    """Test account ID validation."""
    assert validate_aws_account_id("123456789012") is None
    assert validate_aws_account_id("") == "AWS account ID cannot be empty"
    assert validate_aws_account_id("12345") == "AWS account ID must be 12 digits"
    assert validate_aws_account_id("12345678901a") == "AWS account ID must be 12 digits"


def test_role_name():
    """Test role name validation."""
    assert validate_aws_role_name("AdministratorAccess") is None
    assert validate_aws_role_name("role+=,.@_-name") is None
    assert validate_aws_role_name("") == "AWS role name cannot be empty"
    assert validate_aws_role_name("a" * 65) == "AWS role name cannot exceed 64 characters"
    assert validate_aws_role_name("bad role") == "AWS role name contains invalid characters"


def test_profile_prefix():
    """Test profile prefix validation."""
    assert validate_profile_prefix("eng-team-1") is None
    assert validate_profile_prefix("") == "Prefix cannot be empty"
    assert validate_profile_prefix("eng_team") == "Prefix can only contain letters, numbers, and hyphens"


def test_url():
    """Test SSO start URL validation."""
    assert validate_url("https://corp.awsapps.com/start") is None
    assert validate_url("") == "SSO start URL cannot be empty"
    assert validate_url("corp.awsapps.com") == "Please enter a valid URL"


def test_role_arn():
    """Test role ARN validation."""
    assert validate_role_arn("arn:aws:iam::123456789012:role/OIDCRole") is None
    assert validate_role_arn("arn:aws:iam::123456789012:role/path/to/Role") is None
    assert validate_role_arn("") == "Role ARN cannot be empty"
    assert validate_role_arn("arn:aws:iam::123:role/R").startswith("Invalid role ARN")


def test_not_empty_and_yes_no():
    """Test generic validators."""
    assert validate_not_empty("x") is None
    assert validate_not_empty("  ") == "Value cannot be empty"
    for answer in ("yes", "no", "Y", "n"):
        assert validate_yes_no(answer) is None
    assert validate_yes_no("maybe") == "Please enter yes or no"


def test_oidc_client_id():
    """Test OIDC client ID validation."""
    assert validate_oidc_client_id("123456789-abcdef.apps.googleusercontent.com") is None
    assert validate_oidc_client_id("") == "OIDC client ID cannot be empty"
    assert validate_oidc_client_id('abc"; $(id)').startswith("OIDC client ID can only contain")
