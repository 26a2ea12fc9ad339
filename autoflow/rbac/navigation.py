"""
Navigation shell: the role-filtered, sectioned menu with the active route marked.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from autoflow.rbac.access import AccessEvaluator
from autoflow.rbac.registry import DASHBOARD_PATH, MenuItem, Section


@dataclass(frozen=True)
class NavLink:
    title: str
    path: str
    icon: str
    description: Optional[str]
    active: bool


@dataclass(frozen=True)
class NavSection:
    section: Section
    label: str
    links: Tuple[NavLink, ...]


def is_active(item_path: str, current_path: Optional[str]) -> bool:
    """Highlight rule: the dashboard only on "/", other items on themselves and their sub-routes."""
    if current_path is None:
        return False
    if item_path == DASHBOARD_PATH:
        return current_path == DASHBOARD_PATH
    return current_path == item_path or current_path.startswith(item_path + "/")


def build_navigation(
    evaluator: AccessEvaluator, role: Any, current_path: Optional[str] = None
) -> List[NavSection]:
    """Group the role's menu items by section.

    Sections follow ``Section`` order and empty sections are left out. A
    section without a label in the registry still shows, under its
    fallback label. Items keep registry order inside each section.
    """
    items = evaluator.menu_items_for_role(role)
    registry = evaluator.registry
    sections = []
    for section in Section:
        links = tuple(
            _link(evaluator, item, role, current_path)
            for item in items if item.section is section
        )
        if links:
            sections.append(NavSection(section=section, label=registry.section_label(section), links=links))
    return sections


def _link(evaluator: AccessEvaluator, item: MenuItem, role: Any, current_path: Optional[str]) -> NavLink:
    return NavLink(
        title=evaluator.title_for_role(item, role),
        path=item.path,
        icon=item.icon,
        description=item.description,
        active=is_active(item.path, current_path),
    )
