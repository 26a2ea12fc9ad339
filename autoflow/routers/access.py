"""
Navigation and access-decision routes consumed by the front end.
"""
from dataclasses import asdict
from fastapi import APIRouter, Depends

from autoflow.auth import get_auth_session, get_current_active_user
from autoflow.models.user import User
from autoflow.rbac import AccessEvaluator, AuthSession, Role, build_navigation, get_access_evaluator
from autoflow.rbac.guard import DENIAL_REDIRECT_DELAY, REDIRECT_PATH, GuardState, build_view, resolve_guard_state
from autoflow.schemas.access import AccessCheck, GuardDecision, Navigation, NavLink, NavSection

router = APIRouter(tags=["access"])


@router.get("/navigation", response_model=Navigation)
async def get_navigation(
    current_path: str = "/",
    current_user: User = Depends(get_current_active_user),
    evaluator: AccessEvaluator = Depends(get_access_evaluator)
):
    """
    Menu sections the signed-in user may see, with the active route marked.
    """
    role = Role.parse(current_user.role)
    sections = [
        NavSection(
            section=section.section,
            label=section.label,
            links=[NavLink(**asdict(link)) for link in section.links],
        )
        for section in build_navigation(evaluator, role, current_path)
    ]
    return Navigation(role=role, role_label=evaluator.role_display_name(role), sections=sections)


@router.get("/access/check", response_model=AccessCheck)
async def check_access(
    path: str,
    current_user: User = Depends(get_current_active_user),
    evaluator: AccessEvaluator = Depends(get_access_evaluator)
):
    """
    Whether the signed-in user may open ``path``.
    """
    role = Role.parse(current_user.role)
    return AccessCheck(path=path, role=role, allowed=evaluator.has_access(role, path))


@router.get("/access/guard", response_model=GuardDecision)
async def guard_page(
    path: str,
    session: AuthSession = Depends(get_auth_session),
    evaluator: AccessEvaluator = Depends(get_access_evaluator)
):
    """
    Route-guard decision for loading ``path``. Anonymous callers are sent to
    the dashboard at once; denied callers after the grace period.
    """
    state = resolve_guard_state(evaluator, session, path)
    role_label = evaluator.role_display_name(session.role) if session.is_authenticated else None
    view = build_view(state, role_label)

    decision = GuardDecision(
        path=path,
        state=state,
        render_children=view.render_children,
        role_label=view.role_label,
        title=view.title,
        message=view.message,
    )
    if state is GuardState.UNAUTHENTICATED:
        decision.redirect_to = REDIRECT_PATH
        decision.redirect_after_ms = 0
    elif state is GuardState.DENIED_PENDING_REDIRECT:
        decision.redirect_to = REDIRECT_PATH
        decision.redirect_after_ms = int(DENIAL_REDIRECT_DELAY * 1000)
    return decision
