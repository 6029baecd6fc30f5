"""
Resource owner returned by CentralAuth.

The user info endpoint returns a JSON object. Only a few of its fields
have accessors here; everything else (permissions, roles, timestamps)
is available through ``to_dict``.
"""

from typing import Any, Mapping, Optional


class CentralAuthResourceOwner:
    """Read-only view over a CentralAuth user info payload."""

    def __init__(self, response: Mapping[str, Any]):
        self._response = response

    def get_id(self) -> Any:
        """Return the user id as provided (string or integer), or None."""
        return self._response.get("id")

    def get_email(self) -> Optional[str]:
        return self._response.get("email")

    def get_name(self) -> None:
        """
        CentralAuth does not return a display name, so this is always None.

        A ``name`` or ``username`` field in the payload is still reachable
        through ``to_dict``.
        """
        return None

    def get_gravatar(self) -> Optional[str]:
        return self._response.get("gravatar")

    def to_dict(self) -> Mapping[str, Any]:
        """Return the complete payload unchanged."""
        return self._response

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.get_id()!r}>"
