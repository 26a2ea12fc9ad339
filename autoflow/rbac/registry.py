"""
Role registry: the static table of menu items and the roles that may reach them.

A registry is an immutable value built once at startup and handed to the
access evaluator. Tests build their own registries to exercise alternate
menus.
"""
import enum
from typing import Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from autoflow.rbac.roles import Role

DASHBOARD_PATH = "/"


class Section(str, enum.Enum):
    """Presentational grouping for menu items."""
    MAIN = "main"
    OPERATIONS = "operations"
    CUSTOMER = "customer"
    BUSINESS = "business"
    PERSONAL = "personal"


SECTION_LABELS: Dict[Section, str] = {
    Section.MAIN: "Main",
    Section.OPERATIONS: "Operations",
    Section.CUSTOMER: "Customer Management",
    Section.BUSINESS: "Business Management",
    Section.PERSONAL: "My Account",
}


class MenuItem(BaseModel):
    """A navigable page and the roles permitted to use it."""
    title: str
    path: str
    icon: str
    section: Section
    roles: FrozenSet[Role]
    description: Optional[str] = None
    role_titles: Dict[Role, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def allows(self, role: Role) -> bool:
        return role in self.roles

    def covers(self, path: str) -> bool:
        """True if ``path`` is this item's path or one of its sub-routes."""
        return path == self.path or path.startswith(self.path + "/")


class RoleRegistry(BaseModel):
    """Ordered, immutable collection of menu items."""
    items: Tuple[MenuItem, ...]
    section_labels: Dict[Section, str] = Field(default_factory=lambda: dict(SECTION_LABELS))

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_unique_paths(self):
        seen = set()
        for item in self.items:
            if item.path in seen:
                raise ValueError(f"Duplicate menu path: {item.path}")
            seen.add(item.path)
        return self

    def section_label(self, section: Section) -> str:
        return self.section_labels.get(section, section.value.title())


def _item(title, path, icon, section, roles, description=None, role_titles=None) -> MenuItem:
    return MenuItem(
        title=title,
        path=path,
        icon=icon,
        section=section,
        roles=frozenset(roles),
        description=description,
        role_titles=role_titles or {},
    )


def build_default_registry() -> RoleRegistry:
    """Build the shop's menu.

    Every protected page served by the front end needs an entry here;
    pages without one are denied to everyone.
    """
    admin, user, client = Role.ADMIN, Role.USER, Role.CLIENT
    return RoleRegistry(items=(
        _item("Dashboard", DASHBOARD_PATH, "fas fa-tachometer-alt", Section.MAIN,
              {admin, user, client}, "Overview and key metrics",
              {admin: "Management Dashboard", user: "Technician Dashboard", client: "My Dashboard"}),
        _item("Digital Inspections", "/inspections", "fas fa-clipboard-check", Section.OPERATIONS,
              {admin, user}, "Vehicle inspection reports",
              {admin: "All Inspections", user: "My Inspections"}),
        _item("Appointments", "/appointments", "fas fa-calendar-alt", Section.OPERATIONS,
              {admin, user, client}, "Schedule and manage appointments",
              {admin: "All Appointments", user: "My Assignments", client: "My Appointments"}),
        _item("Repair Orders", "/repair-orders", "fas fa-wrench", Section.OPERATIONS,
              {admin, user}, "Track repair progress",
              {admin: "All Work Orders", user: "My Work Orders"}),
        _item("Job Board", "/job-board", "fas fa-tasks", Section.OPERATIONS,
              {admin, user}, "View and assign work",
              {admin: "Work Assignment Board", user: "Available Jobs"}),
        _item("Customer Management", "/customers", "fas fa-users", Section.CUSTOMER,
              {admin}, "Manage customer database"),
        _item("Vehicles", "/vehicles", "fas fa-car", Section.CUSTOMER,
              {admin, client}, "Manage vehicle information",
              {admin: "Vehicle Management", client: "My Vehicles"}),
        _item("Two-Way Texting", "/messaging", "fas fa-sms", Section.CUSTOMER,
              {admin}, "Communicate with customers"),
        _item("Reviews Campaign", "/reviews", "fas fa-star", Section.CUSTOMER,
              {admin}, "Manage customer reviews"),
        _item("My Account", "/customer-portal", "fas fa-user-circle", Section.PERSONAL,
              {client}, "View your vehicles and services"),
        _item("Invoices & Payments", "/invoices", "fas fa-file-invoice-dollar", Section.BUSINESS,
              {admin}),
        _item("Inventory", "/inventory", "fas fa-boxes", Section.BUSINESS, {admin}),
        _item("Reporting", "/reporting", "fas fa-chart-line", Section.BUSINESS, {admin}),
        _item("User Management", "/users", "fas fa-users-cog", Section.BUSINESS, {admin}),
        _item("Settings", "/settings", "fas fa-cog", Section.BUSINESS, {admin}),
    ))
