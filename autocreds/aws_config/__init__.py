"""
AWS config file handling: parsing, merging, profile templates and discovery.
"""

from .parser import Section, ConfigDocument, parse_aws_config, stringify_aws_config
from .merge import upsert_profile
from .profiles import (
    load_config,
    write_profile,
    create_sso_profile,
    create_oidc_profile,
    create_auto_refresh_profile,
    list_profiles,
    get_current_profile,
    ProfileInfo
)
from .validate import validate_profile

__all__ = [
    'Section',
    'ConfigDocument',
    'parse_aws_config',
    'stringify_aws_config',
    'upsert_profile',
    'load_config',
    'write_profile',
    'create_sso_profile',
    'create_oidc_profile',
    'create_auto_refresh_profile',
    'list_profiles',
    'get_current_profile',
    'ProfileInfo',
    'validate_profile',
]
