"""
Authentication state as seen by the access-control layer.
"""
from dataclasses import dataclass
from typing import Any, Optional

from autoflow.rbac.roles import Role


@dataclass(frozen=True)
class AuthSession:
    """Snapshot of the auth provider: ``{user, is_authenticated, is_loading}``."""
    user: Optional[Any] = None
    is_authenticated: bool = False
    is_loading: bool = False

    @classmethod
    def loading(cls) -> "AuthSession":
        return cls(is_loading=True)

    @classmethod
    def anonymous(cls) -> "AuthSession":
        return cls()

    @classmethod
    def for_user(cls, user: Any) -> "AuthSession":
        return cls(user=user, is_authenticated=user is not None)

    @property
    def role(self) -> Role:
        """The user's role, parsed from untrusted input."""
        if self.user is None:
            return Role.UNKNOWN
        if isinstance(self.user, dict):
            raw = self.user.get("role")
        else:
            raw = getattr(self.user, "role", None)
        return Role.parse(raw)
