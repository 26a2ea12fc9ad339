"""
Pydantic schemas for navigation and access decisions.
"""
from pydantic import BaseModel
from typing import List, Optional
from autoflow.rbac import GuardState, Role, Section


class NavLink(BaseModel):
    title: str
    path: str
    icon: str
    description: Optional[str] = None
    active: bool = False


class NavSection(BaseModel):
    section: Section
    label: str
    links: List[NavLink]


class Navigation(BaseModel):
    """Menu for the current user."""
    role: Role
    role_label: str
    sections: List[NavSection]


class AccessCheck(BaseModel):
    path: str
    role: Role
    allowed: bool


class GuardDecision(BaseModel):
    """How the front end should handle a page load."""
    path: str
    state: GuardState
    render_children: bool
    role_label: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    redirect_to: Optional[str] = None
    redirect_after_ms: Optional[int] = None
