"""Errors raised by the CentralAuth provider."""

from authlib.integrations.base_client import OAuthError


class CentralAuthError(Exception):
    """Base class for CentralAuth provider errors."""


class IdentityProviderError(CentralAuthError, OAuthError):
    """
    The identity service answered with an HTTP error status.

    Attributes:
        message: Message extracted from the response body
        code: HTTP status code
        response: The raw HTTP response
    """

    error = "identity_provider_error"

    def __init__(self, message, code, response=None):
        super().__init__(description=message)
        self.message = message
        self.code = code
        self.response = response

    def __str__(self):
        return str(self.message)


class UnexpectedPayloadError(CentralAuthError, ValueError):
    """A successful response carried a body that is not a JSON object."""
