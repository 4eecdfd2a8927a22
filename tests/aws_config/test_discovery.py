import pytest
from autocreds.aws_config.discovery import (
    extract_profile_details,
    find_new_sso_profiles,
    find_sso_profiles,
    is_sso_profile,
    profile_names,
    resolve_sso_start_url,
)
from autocreds.aws_config.parser import ConfigDocument, parse_aws_config

CONFIG_BEFORE = """
[default]
region = us-east-1

[profile legacy-sso]
sso_start_url = https://legacy.awsapps.com/start
sso_region = us-east-1
sso_account_id = 111111111111
sso_role_name = ReadOnly

[profile static]
region = eu-west-1
"""

NEW_PROFILE = """
[sso-session corp]
sso_start_url = https://corp.awsapps.com/start
sso_region = eu-central-1

[profile AdministratorAccess-123456789012]
sso_session = corp
sso_account_id = 123456789012
sso_role_name = AdministratorAccess
region = eu-west-1
"""


def test_profile_names():
    """Test that only profile sections are listed."""
    document = parse_aws_config(CONFIG_BEFORE + NEW_PROFILE)

    assert profile_names(document) == ["legacy-sso", "static", "AdministratorAccess-123456789012"]


def test_find_sso_profiles():
    """Test detecting profiles with SSO settings."""
    document = parse_aws_config(CONFIG_BEFORE + NEW_PROFILE)

    assert find_sso_profiles(document) == ["legacy-sso", "AdministratorAccess-123456789012"]


def test_is_sso_profile_ignores_empty_values():
    """Test that an empty sso_* value does not count."""
    document = parse_aws_config("[profile x]\nsso_region =\n")

    assert not is_sso_profile(document["profile x"])
    assert not is_sso_profile(None)


def test_find_new_sso_profiles():
    """Test diffing configs before and after aws configure sso."""
    before = parse_aws_config(CONFIG_BEFORE)
    after = parse_aws_config(CONFIG_BEFORE + NEW_PROFILE)

    assert find_new_sso_profiles(before, after) == ["AdministratorAccess-123456789012"]


def test_find_new_sso_profiles_falls_back_to_name_pattern():
    """Test that admin-looking profiles are used when nothing new is found."""
    content = CONFIG_BEFORE + "\n[profile AdministratorAccess-222222222222]\nregion = us-east-1\n"
    document = parse_aws_config(content)

    assert find_new_sso_profiles(document, document) == ["AdministratorAccess-222222222222"]


def test_find_new_sso_profiles_nothing_new():
    """Test that unchanged configs give no profiles."""
    document = parse_aws_config(CONFIG_BEFORE)

    assert find_new_sso_profiles(document, document) == []


def test_resolve_start_url_from_session():
    """Test resolving the start URL through sso_session."""
    document = parse_aws_config(NEW_PROFILE)

    assert resolve_sso_start_url(document, "AdministratorAccess-123456789012") == "https://corp.awsapps.com/start"


def test_resolve_start_url_from_profile():
    """Test that a start URL on the profile wins."""
    document = parse_aws_config(CONFIG_BEFORE + NEW_PROFILE)

    assert resolve_sso_start_url(document, "legacy-sso") == "https://legacy.awsapps.com/start"


def test_resolve_start_url_falls_back_to_other_sections():
    """Test searching sso-sessions, then other profiles."""
    document = parse_aws_config("[profile a]\nsso_session = missing\n" + NEW_PROFILE)
    assert resolve_sso_start_url(document, "a") == "https://corp.awsapps.com/start"

    document = parse_aws_config("[profile a]\nregion = us-east-1\n" + CONFIG_BEFORE)
    assert resolve_sso_start_url(document, "a") == "https://legacy.awsapps.com/start"

    assert resolve_sso_start_url(ConfigDocument(), "a") is None


def test_extract_profile_details():
    """Test extracting setup values from a complete profile."""
    document = parse_aws_config(NEW_PROFILE)

    details = extract_profile_details(document, "AdministratorAccess-123456789012")

    assert details.prefix == "AdministratorAccess-123456789012"
    assert details.region == "eu-west-1"
    assert details.account_id == "123456789012"
    assert details.role_name == "AdministratorAccess"
    assert details.sso_start_url == "https://corp.awsapps.com/start"


def test_extract_profile_details_from_name():
    """Test guessing account ID and role name from the profile name."""
    document = parse_aws_config("[profile AdministratorAccess-123456789012]\nsso_region = us-east-2\n")

    details = extract_profile_details(document, "AdministratorAccess-123456789012")

    assert details.account_id == "123456789012"
    assert details.role_name == "AdministratorAccess"
    assert details.region == "us-east-2"
    assert details.sso_start_url is None


def test_extract_profile_details_hyphenated_role_is_best_effort():
    """Test that a hyphenated role name is cut at the first hyphen."""
    document = parse_aws_config("[profile Power-User-123456789012]\nregion = us-east-1\n")

    details = extract_profile_details(document, "Power-User-123456789012")

    assert details.role_name == "Power"
    assert details.account_id == "123456789012"


@pytest.mark.parametrize("name,content", [
    ("Admin-12345", "[profile Admin-12345]\nregion = us-east-1\n"),
    ("plain", "[profile plain]\nregion = us-east-1\n"),
    ("absent", ""),
])
def test_extract_profile_details_incomplete(name, content):
    """Test that missing account ID or role name gives None."""
    assert extract_profile_details(parse_aws_config(content), name) is None


def test_extract_profile_details_default_region():
    """Test the default region when the profile has none."""
    document = parse_aws_config("[profile p]\nsso_account_id = 123456789012\nsso_role_name = R\n")

    assert extract_profile_details(document, "p").region == "us-east-1"
