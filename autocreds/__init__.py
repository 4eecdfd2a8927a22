"""
autocreds: sets up AWS profiles that refresh their own credentials through
AWS SSO or OIDC federation.
"""

__version__ = "1.0.0"
