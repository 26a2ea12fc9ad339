"""
Role-based access control for AutoFlow GMS.
"""
from autoflow.rbac.roles import Role, ROLE_DISPLAY_NAMES
from autoflow.rbac.registry import MenuItem, RoleRegistry, Section, build_default_registry
from autoflow.rbac.access import AccessEvaluator, get_access_evaluator
from autoflow.rbac.session import AuthSession
from autoflow.rbac.guard import GuardState, GuardView, RouteGuard, resolve_guard_state
from autoflow.rbac.navigation import NavLink, NavSection, build_navigation

__all__ = [
    "Role", "ROLE_DISPLAY_NAMES",
    "MenuItem", "RoleRegistry", "Section", "build_default_registry",
    "AccessEvaluator", "get_access_evaluator",
    "AuthSession",
    "GuardState", "GuardView", "RouteGuard", "resolve_guard_state",
    "NavLink", "NavSection", "build_navigation",
]
