"""
Configuration management for the CentralAuth provider.

This module resolves provider options from either of the accepted
key-naming conventions, and loads plugin configuration from the
environment.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence


# Accepted option keys per field, in priority order
AUTHORIZATION_URL_KEYS = ("authorization_url", "urlAuthorize")
TOKEN_URL_KEYS = ("token_url", "urlAccessToken")
RESOURCE_OWNER_DETAILS_URL_KEYS = (
    "resource_owner_details_url",
    "urlResourceOwnerDetails",
)
DOMAIN_KEYS = ("domain",)
CLIENT_ID_KEYS = ("clientId", "client_id")
CLIENT_SECRET_KEYS = ("clientSecret", "client_secret")
REDIRECT_URI_KEYS = ("redirectUri", "redirect_uri")
SCOPE_KEYS = ("scope",)


def resolve_option(
    options: Mapping[str, Any],
    aliases: Sequence[str],
    default: Any = None,
) -> Any:
    """
    Return the value of the first alias present in ``options``.

    A key holding ``None`` counts as absent.

    Args:
        options: Raw option mapping
        aliases: Accepted keys, highest priority first
        default: Value returned when no alias is present

    Returns:
        The resolved value or ``default``
    """
    for alias in aliases:
        value = options.get(alias)
        if value is not None:
            return value
    return default


@dataclass(frozen=True)
class CentralAuthConfig:
    """CentralAuth provider configuration."""

    # Provider identification
    name: str = "centralauth"

    # OAuth2 endpoints
    authorization_url: str = ""
    token_url: str = ""
    resource_owner_details_url: str = ""

    # Appended as ?domain= to the resource owner details URL
    domain: Optional[str] = None

    # Client credentials
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""

    # CentralAuth defines no default scopes
    scope: str = ""

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "CentralAuthConfig":
        """Create configuration from a provider option mapping."""
        options = options or {}
        return cls(
            authorization_url=resolve_option(options, AUTHORIZATION_URL_KEYS, ""),
            token_url=resolve_option(options, TOKEN_URL_KEYS, ""),
            resource_owner_details_url=resolve_option(
                options, RESOURCE_OWNER_DETAILS_URL_KEYS, ""
            ),
            domain=resolve_option(options, DOMAIN_KEYS),
            client_id=resolve_option(options, CLIENT_ID_KEYS, ""),
            client_secret=resolve_option(options, CLIENT_SECRET_KEYS, ""),
            redirect_uri=resolve_option(options, REDIRECT_URI_KEYS, ""),
            scope=resolve_option(options, SCOPE_KEYS, ""),
        )

    @classmethod
    def from_env(cls) -> "CentralAuthConfig":
        """Create configuration from environment variables."""
        base_url = os.environ.get("CENTRALAUTH_BASE_URL", "http://localhost:5000")

        return cls(
            name=os.environ.get("CENTRALAUTH_PROVIDER_NAME", "centralauth"),
            authorization_url=os.environ.get("CENTRALAUTH_AUTHORIZATION_URL", ""),
            token_url=os.environ.get("CENTRALAUTH_TOKEN_URL", ""),
            resource_owner_details_url=os.environ.get(
                "CENTRALAUTH_RESOURCE_OWNER_DETAILS_URL", ""
            ),
            domain=os.environ.get("CENTRALAUTH_DOMAIN") or None,
            client_id=os.environ.get("CENTRALAUTH_CLIENT_ID", ""),
            client_secret=os.environ.get("CENTRALAUTH_CLIENT_SECRET", ""),
            redirect_uri=os.environ.get(
                "CENTRALAUTH_REDIRECT_URI",
                f"{base_url}/auth/callback"
            ),
            scope=os.environ.get("CENTRALAUTH_SCOPE", ""),
        )

    @property
    def is_configured(self) -> bool:
        """True when the endpoints and client id needed for login are set."""
        return bool(self.authorization_url and self.token_url and self.client_id)


@dataclass
class PluginConfig:
    """Overall plugin configuration."""

    centralauth: CentralAuthConfig = field(default_factory=CentralAuthConfig.from_env)

    # Base URL for constructing callback URLs
    base_url: str = "http://localhost:5000"

    # Frontend redirect settings
    frontend_url: str = "/"
    login_success_redirect: str = "/"
    login_error_redirect: str = "/login?error=auth_failed"

    @classmethod
    def from_env(cls) -> "PluginConfig":
        """Create configuration from environment variables."""
        return cls(
            centralauth=CentralAuthConfig.from_env(),
            base_url=os.environ.get("CENTRALAUTH_BASE_URL", "http://localhost:5000"),
            frontend_url=os.environ.get("CENTRALAUTH_FRONTEND_URL", "/"),
            login_success_redirect=os.environ.get(
                "CENTRALAUTH_LOGIN_SUCCESS_REDIRECT", "/"
            ),
            login_error_redirect=os.environ.get(
                "CENTRALAUTH_LOGIN_ERROR_REDIRECT", "/login?error=auth_failed"
            ),
        )
