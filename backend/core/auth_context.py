"""Request-scoped authentication context utilities.

Stores the identity decoded from the bearer token using ``contextvars`` so
downstream code can read the caller's claims without another token check.
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthContextData:
    """The authenticated caller as asserted by their token."""

    user_id: str
    email: str
    role: str

    def has_role(self, role: str) -> bool:
        """Return ``True`` if the token grants the specified role."""
        return self.role == role


_auth_context: ContextVar[Optional[AuthContextData]] = ContextVar(
    "auth_context", default=None
)


def set_auth_context(context: AuthContextData) -> None:
    """Persist the authentication context for the active request."""
    _auth_context.set(context)


def get_auth_context() -> Optional[AuthContextData]:
    """Fetch the current authentication context if one has been established."""
    return _auth_context.get()
