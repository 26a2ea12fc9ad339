"""
Role enumeration for the access-control layer.

Role values reaching this module come from the auth provider and are
untrusted. ``Role.parse`` maps anything outside the known set onto
``Role.UNKNOWN``, which holds no grants.
"""
import enum
from typing import Any


class Role(str, enum.Enum):
    """User role enumeration."""
    ADMIN = "admin"
    USER = "user"
    CLIENT = "client"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        """Coerce a raw role value to a Role, never raising."""
        if isinstance(value, cls):
            return value
        if isinstance(value, enum.Enum):
            value = value.value
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self is not Role.UNKNOWN


# Roles that can be granted to an account.
ASSIGNABLE_ROLES = (Role.ADMIN, Role.USER, Role.CLIENT)

ROLE_DISPLAY_NAMES = {
    Role.ADMIN: "Shop Manager",
    Role.USER: "Technician",
    Role.CLIENT: "Client",
}

DEFAULT_DISPLAY_NAME = "User"
