"""
centralauth-oauth2

A CentralAuth provider for the authlib OAuth 2.0 client.

This package provides:
- CentralAuth endpoint configuration, accepting snake_case and camelCase options
- Domain-scoped resource owner (user info) requests
- Error extraction from CentralAuth responses
- A read-only resource owner object over the user info payload
- A Flask blueprint and plugin driving the authorization code flow
"""

__version__ = "0.1.0"

from .exceptions import CentralAuthError, IdentityProviderError, UnexpectedPayloadError
from .plugin import CentralAuthPlugin
from .provider import CentralAuthProvider
from .request_context import RequestContext
from .resource_owner import CentralAuthResourceOwner

__all__ = [
    "CentralAuthError",
    "CentralAuthPlugin",
    "CentralAuthProvider",
    "CentralAuthResourceOwner",
    "IdentityProviderError",
    "RequestContext",
    "UnexpectedPayloadError",
    "__version__",
]
