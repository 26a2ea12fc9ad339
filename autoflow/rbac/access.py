"""
Access evaluator: role and path in, allow/deny out.

The evaluator is pure and synchronous. It never raises for malformed role
or path input; unknown roles and unregistered paths are denied.
"""
from functools import lru_cache
from typing import Any, Optional, Tuple

from autoflow.rbac.registry import DASHBOARD_PATH, MenuItem, RoleRegistry, build_default_registry
from autoflow.rbac.roles import DEFAULT_DISPLAY_NAME, ROLE_DISPLAY_NAMES, Role


class AccessEvaluator:
    """Answers authorization questions against a single registry."""

    def __init__(self, registry: RoleRegistry):
        self.registry = registry

    def menu_items_for_role(self, role: Any) -> Tuple[MenuItem, ...]:
        """Menu items visible to ``role``, in registry order."""
        role = Role.parse(role)
        return tuple(item for item in self.registry.items if item.allows(role))

    def find_entry(self, path: Any) -> Optional[MenuItem]:
        """First registry entry whose path equals or prefixes ``path``."""
        if not isinstance(path, str):
            return None
        for item in self.registry.items:
            if item.covers(path):
                return item
        return None

    def has_access(self, role: Any, path: Any) -> bool:
        if path == DASHBOARD_PATH:
            return True
        entry = self.find_entry(path)
        if entry is None:
            return False
        return entry.allows(Role.parse(role))

    def role_display_name(self, role: Any) -> str:
        return ROLE_DISPLAY_NAMES.get(Role.parse(role), DEFAULT_DISPLAY_NAME)

    def title_for_role(self, item: MenuItem, role: Any) -> str:
        """Role-specific title for ``item``, falling back to its default title."""
        return item.role_titles.get(Role.parse(role)) or item.title


@lru_cache()
def get_access_evaluator() -> AccessEvaluator:
    """Evaluator over the default registry, shared by the whole process."""
    return AccessEvaluator(build_default_registry())
