"""
CentralAuth provider for authlib.

The authorization code flow itself (authorization URL assembly, state,
code exchange) is handled by authlib's ``OAuth2Session``. This module
supplies the CentralAuth endpoints to it, and implements the
CentralAuth-specific resource owner request:

- a POST to the user info endpoint, optionally scoped by ``?domain=``
- Basic authentication with the client credentials
- the access token as the raw request body
- the end user's IP address and user agent as extra headers
"""

import base64
import json
import logging
from typing import Any, Mapping, Optional, Tuple
from urllib.parse import quote_plus

import httpx
from authlib.integrations.requests_client import OAuth2Session

from .config import CentralAuthConfig
from .exceptions import IdentityProviderError, UnexpectedPayloadError
from .request_context import RequestContext
from .resource_owner import CentralAuthResourceOwner

logger = logging.getLogger(__name__)


def get_access_token_string(token) -> Optional[str]:
    """
    Extract the access token string from a token value.

    Accepts a bare string, a token mapping such as authlib's
    ``OAuth2Token``, or an object with an ``access_token`` attribute.
    """
    if token is None or isinstance(token, str):
        return token
    if isinstance(token, Mapping):
        return token.get("access_token")
    return getattr(token, "access_token", None)


def parse_response(response: httpx.Response) -> Any:
    """Return the decoded JSON body, or the body text if it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


class CentralAuthProvider:
    """
    OAuth2 provider for a CentralAuth deployment.

    The provider holds only immutable configuration, so a single instance
    can serve concurrent requests.
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        http_client: Optional[httpx.Client] = None,
        config: Optional[CentralAuthConfig] = None,
    ):
        """
        Initialize the provider.

        Args:
            options: Provider options, keyed by either accepted naming
                convention (e.g. ``token_url`` or ``urlAccessToken``)
            http_client: httpx client used for the resource owner request.
                A short-lived client is opened per request when omitted.
            config: Pre-resolved configuration, used instead of ``options``
        """
        self.config = config if config is not None else CentralAuthConfig.from_options(options)
        self.http_client = http_client

    @property
    def client_id(self) -> str:
        return self.config.client_id

    @property
    def client_secret(self) -> str:
        return self.config.client_secret

    @property
    def redirect_uri(self) -> str:
        return self.config.redirect_uri

    @property
    def domain(self) -> Optional[str]:
        return self.config.domain

    def get_base_authorization_url(self) -> str:
        return self.config.authorization_url

    def get_base_access_token_url(self, params: Optional[Mapping[str, Any]] = None) -> str:
        return self.config.token_url

    def get_resource_owner_details_url(self, token=None) -> str:
        """
        Return the user info endpoint, with ``?domain=`` when a domain is set.

        Args:
            token: Access token (unused, kept for interface compatibility)
        """
        url = self.config.resource_owner_details_url
        if self.config.domain:
            url = f"{url}?domain={quote_plus(self.config.domain)}"
        return url

    def get_default_scopes(self) -> list:
        return []

    def validate_response(self, response, data) -> None:
        """
        Raise if the response carries an HTTP error status.

        The error message is taken from ``error_description``, ``error`` or
        ``message`` when ``data`` is a mapping (falling back to the whole body
        as JSON), from ``data`` itself when it is a string, and is
        "Unknown error" otherwise.

        Args:
            response: HTTP response (anything with ``status_code``)
            data: Parsed response body

        Raises:
            IdentityProviderError: If the status code is 400 or above
        """
        status = response.status_code
        if status < 400:
            return

        message = "Unknown error"
        if isinstance(data, Mapping):
            for key in ("error_description", "error", "message"):
                if data.get(key) is not None:
                    message = data[key]
                    break
            else:
                message = json.dumps(dict(data), separators=(",", ":"))
        elif isinstance(data, str):
            message = data

        logger.warning(f"CentralAuth responded with {status}: {message}")
        raise IdentityProviderError(message, status, response)

    def get_authorization_headers(self, token=None) -> dict:
        """Return a Bearer Authorization header, or no headers without a token."""
        access_token = get_access_token_string(token) if token else None
        if not access_token:
            return {}
        return {"Authorization": f"Bearer {access_token}"}

    def get_basic_authorization_header(self) -> str:
        credentials = f"{self.config.client_id}:{self.config.client_secret}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    def get_parsed_response(self, response: httpx.Response) -> Any:
        """Parse a response body and raise if the status is an error."""
        parsed = parse_response(response)
        self.validate_response(response, parsed)
        return parsed

    def fetch_resource_owner_details(
        self,
        token,
        context: Optional[RequestContext] = None,
    ) -> dict:
        """
        Request the user info for an access token.

        Args:
            token: Access token (string or token mapping)
            context: IP address and user agent of the end user

        Returns:
            The user info payload

        Raises:
            IdentityProviderError: If CentralAuth returns an error status
            UnexpectedPayloadError: If the body is not a JSON object
        """
        context = context or RequestContext()
        url = self.get_resource_owner_details_url(token)

        headers = {"Authorization": self.get_basic_authorization_header()}
        headers.update(context.as_headers())
        body = get_access_token_string(token) or ""

        logger.debug(f"Fetching resource owner details from {url}")
        if self.http_client is not None:
            response = self.http_client.post(url, headers=headers, content=body)
        else:
            with httpx.Client() as client:
                response = client.post(url, headers=headers, content=body)

        parsed = self.get_parsed_response(response)
        if not isinstance(parsed, Mapping):
            raise UnexpectedPayloadError("Invalid user info response")

        logger.debug(f"Resource owner payload keys: {sorted(parsed)}")
        return parsed

    def create_resource_owner(self, payload: Mapping[str, Any], token=None) -> CentralAuthResourceOwner:
        return CentralAuthResourceOwner(payload)

    def get_resource_owner(
        self,
        token,
        context: Optional[RequestContext] = None,
    ) -> CentralAuthResourceOwner:
        """Fetch the user info for ``token`` and wrap it in a resource owner."""
        payload = self.fetch_resource_owner_details(token, context)
        return self.create_resource_owner(payload, token)

    def create_oauth2_session(self, state: Optional[str] = None) -> OAuth2Session:
        """Create an authlib OAuth2 session for this provider."""
        scope = self.config.scope or " ".join(self.get_default_scopes()) or None
        return OAuth2Session(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            redirect_uri=self.config.redirect_uri,
            scope=scope,
            state=state,
        )

    def create_authorization_url(self, state: Optional[str] = None, **kwargs) -> Tuple[str, str]:
        """
        Build the URL to send the user to, via authlib.

        Returns:
            Tuple of (authorization URL, state)
        """
        with self.create_oauth2_session() as session:
            return session.create_authorization_url(
                self.get_base_authorization_url(),
                state=state,
                **kwargs,
            )

    def fetch_access_token(
        self,
        code: str,
        authorization_response: Optional[str] = None,
        state: Optional[str] = None,
    ) -> dict:
        """
        Exchange an authorization code for an access token, via authlib.

        Returns:
            authlib ``OAuth2Token`` (a dict)
        """
        params = {"code": code}
        if authorization_response:
            params["authorization_response"] = authorization_response

        with self.create_oauth2_session(state=state) as session:
            return session.fetch_token(self.get_base_access_token_url(params), **params)
