"""
Bash templates for the credential refresh scripts.

Both scripts follow the credential_process contract: called with ``--json``
they print ``{"Version": 1, "AccessKeyId": ..., "SecretAccessKey": ...,
"SessionToken": ..., "Expiration": ...}`` on stdout; called without arguments
they refresh silently and print a single success line. They exit non-zero
when no credentials can be obtained.
"""

import enum
import re
from typing import Mapping, Optional


class ScriptKind(enum.Enum):
    SSO = "sso"
    OIDC = "oidc"


SUCCESS_LINE = "AWS credentials refreshed successfully"

SSO_REFRESH_TEMPLATE = r"""#!/usr/bin/env bash

# AWS SSO credential refresh script for profile: PROFILE_NAME
# This script checks if the SSO session is valid and refreshes it if needed
# Generated by aws-auto-credentials

set -e

# Function to check if jq is installed
check_jq() {
  if ! command -v jq &> /dev/null; then
    echo "Error: jq is required but not installed." >&2
    echo "Please install jq: https://stedolan.github.io/jq/download/" >&2
    exit 1
  fi
}

# Returns 0 when a cached SSO token is valid for at least five more minutes
get_sso_credentials() {
  local cache_dir="$HOME/.aws/sso/cache"
  local latest_file=""
  local latest_time=0

  if [ -d "$cache_dir" ]; then
    for file in "$cache_dir"/*.json; do
      if [ -f "$file" ] && grep -q "accessToken" "$file" 2>/dev/null; then
        file_time=$(stat -c %Y "$file" 2>/dev/null || stat -f %m "$file" 2>/dev/null)
        if [ "$file_time" -gt "$latest_time" ]; then
          latest_time=$file_time
          latest_file=$file
        fi
      fi
    done
  fi

  if [ -n "$latest_file" ] && command -v jq &> /dev/null; then
    expiration=$(jq -r '.expiresAt' "$latest_file" 2>/dev/null)
    if [ -n "$expiration" ] && [ "$expiration" != "null" ]; then
      expiration_timestamp=$(date -d "$expiration" +%s 2>/dev/null || date -j -f "%Y-%m-%dT%H:%M:%SZ" "$expiration" +%s 2>/dev/null)
      current_timestamp=$(date +%s)
      buffer_time=300
      if [ "$((expiration_timestamp - current_timestamp))" -gt "$buffer_time" ]; then
        return 0
      fi
    fi
  fi

  return 1
}

get_aws_credentials() {
  if ! get_sso_credentials; then
    echo "SSO session expired or not found. Refreshing..." >&2
    if ! aws sso login --profile "PROFILE_NAME" >&2; then
      echo "Failed to refresh SSO session" >&2
      exit 1
    fi
  fi

  local temp_creds_file
  temp_creds_file=$(mktemp)

  # Forces the CLI to resolve the SSO credentials
  if ! aws sts get-caller-identity --profile "PROFILE_NAME" > /dev/null 2>&1; then
    echo "Failed to get caller identity with SSO profile" >&2
    rm -f "$temp_creds_file"
    exit 1
  fi

  if ! AWS_PROFILE="PROFILE_NAME" aws configure export-credentials --format process > "$temp_creds_file" 2>/dev/null; then
    echo "Failed to export credentials, trying alternative method" >&2
    local credentials_file="$HOME/.aws/cli/cache/PROFILE_NAME.json"
    if [ -f "$credentials_file" ]; then
      cat "$credentials_file" > "$temp_creds_file"
    else
      echo "Could not find cached credentials" >&2
      rm -f "$temp_creds_file"
      exit 1
    fi
  fi

  if ! grep -q "Version" "$temp_creds_file"; then
    local temp_fixed_file
    temp_fixed_file=$(mktemp)
    jq '. + {Version: 1}' "$temp_creds_file" > "$temp_fixed_file"
    mv "$temp_fixed_file" "$temp_creds_file"
  fi

  cat "$temp_creds_file"
  rm -f "$temp_creds_file"
}

# Main execution
if [ "$1" = "--json" ]; then
  check_jq
  get_aws_credentials
else
  get_aws_credentials >/dev/null
  echo "SUCCESS_LINE"
fi
"""

GOOGLE_OIDC_REFRESH_TEMPLATE = r"""#!/usr/bin/env bash

# Google OIDC credential refresh script for profile: PROFILE_NAME
# This script exchanges a Google identity token for temporary AWS credentials
# Generated by aws-auto-credentials

set -e

# Function to check if jq is installed
check_jq() {
  if ! command -v jq &> /dev/null; then
    echo "Error: jq is required but not installed." >&2
    echo "Please install jq: https://stedolan.github.io/jq/download/" >&2
    exit 1
  fi
}

# Function to check if gcloud is installed
check_gcloud() {
  if ! command -v gcloud &> /dev/null; then
    echo "Error: Google Cloud SDK (gcloud) is required but not installed." >&2
    echo "Please install it from: https://cloud.google.com/sdk/docs/install" >&2
    exit 1
  fi
}

get_aws_credentials() {
  local role_arn="ROLE_ARN"
  local client_id="CLIENT_ID"
  local session_name="PROFILE_NAME-$(date +%s)"

  local id_token
  if ! id_token=$(gcloud auth print-identity-token --audiences="$client_id" 2>/dev/null) || [ -z "$id_token" ]; then
    echo "Failed to get Google identity token. Run: gcloud auth login" >&2
    exit 1
  fi

  local response
  if ! response=$(aws sts assume-role-with-web-identity \
      --role-arn "$role_arn" \
      --role-session-name "$session_name" \
      --web-identity-token "$id_token" \
      --duration-seconds 3600 \
      --output json); then
    echo "Failed to assume role $role_arn with web identity" >&2
    exit 1
  fi

  echo "$response" | jq '{
    Version: 1,
    AccessKeyId: .Credentials.AccessKeyId,
    SecretAccessKey: .Credentials.SecretAccessKey,
    SessionToken: .Credentials.SessionToken,
    Expiration: .Credentials.Expiration
  }'
}

# Main execution
check_jq
check_gcloud
if [ "$1" = "--json" ]; then
  get_aws_credentials
else
  get_aws_credentials >/dev/null
  echo "SUCCESS_LINE"
fi
"""


_PLACEHOLDER_RE = re.compile(r"\b(PROFILE_NAME|ROLE_ARN|CLIENT_ID|SUCCESS_LINE)\b")
_BASH_DQUOTE_SPECIAL_RE = re.compile(r'([\\"$`])')


def quote_for_bash(value: str) -> str:
    """Escape a value for use inside a double-quoted bash string."""
    return _BASH_DQUOTE_SPECIAL_RE.sub(r"\\\1", value)


def _fill(template: str, values: Mapping[str, str]) -> str:
    # One pass: substituted values are never rescanned
    return _PLACEHOLDER_RE.sub(lambda match: values[match.group(1)], template)


def render_sso_refresh_script(profile_name: str) -> str:
    """
    Generate the content of the SSO refresh script.

    Args:
        profile_name: The AWS profile used for ``aws sso login``

    Returns:
        The script content as a string
    """
    return _fill(SSO_REFRESH_TEMPLATE, {
        "PROFILE_NAME": quote_for_bash(profile_name),
        "SUCCESS_LINE": SUCCESS_LINE,
    })


def render_google_oidc_refresh_script(profile_name: str, role_arn: str, client_id: str) -> str:
    """
    Generate the content of the Google OIDC refresh script.

    Args:
        profile_name: The AWS profile the script serves
        role_arn: Role assumed with the Google identity token
        client_id: OAuth client ID used as token audience

    Returns:
        The script content as a string
    """
    return _fill(GOOGLE_OIDC_REFRESH_TEMPLATE, {
        "PROFILE_NAME": quote_for_bash(profile_name),
        "ROLE_ARN": quote_for_bash(role_arn),
        "CLIENT_ID": quote_for_bash(client_id),
        "SUCCESS_LINE": SUCCESS_LINE,
    })


def render_script(profile_name: str, kind: ScriptKind,
                  params: Optional[Mapping[str, str]] = None) -> str:
    """
    Render the refresh script for a profile.

    ``params`` must hold ``role_arn`` and ``client_id`` for OIDC scripts.
    """
    params = params or {}
    if kind is ScriptKind.OIDC:
        return render_google_oidc_refresh_script(profile_name, params["role_arn"], params["client_id"])
    return render_sso_refresh_script(profile_name)


def refresh_script_name(prefix: str) -> str:
    return f"refresh-if-needed-{prefix}.sh"
