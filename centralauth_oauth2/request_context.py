"""
Caller network metadata forwarded to CentralAuth.

CentralAuth expects the end user's IP address and user agent alongside
the resource owner details request.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_USER_AGENT = "CentralAuth-OAuth2-Client"


@dataclass(frozen=True)
class RequestContext:
    """IP address and user agent of the end user being authenticated."""

    client_ip: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_headers(
        cls,
        headers: Mapping[str, str],
        remote_addr: Optional[str] = None,
    ) -> "RequestContext":
        """
        Build a context from incoming request headers.

        The client IP is taken from X-Forwarded-For, then X-Real-IP, then
        the direct peer address.

        Args:
            headers: Request headers (case-insensitive mapping preferred)
            remote_addr: Address of the direct peer

        Returns:
            RequestContext for the request
        """
        client_ip = (
            headers.get("X-Forwarded-For")
            or headers.get("X-Real-IP")
            or remote_addr
        )
        user_agent = headers.get("User-Agent") or DEFAULT_USER_AGENT
        return cls(client_ip=client_ip, user_agent=user_agent)

    def as_headers(self) -> dict:
        """Return the headers CentralAuth reads the caller metadata from."""
        return {
            "auth-ip": self.client_ip or "",
            "user-agent": self.user_agent,
        }
