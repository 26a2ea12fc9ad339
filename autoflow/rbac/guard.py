"""
Route guard: the per-page state machine that decides whether protected
content may render.

States and transitions::

    LOADING ──auth resolved──> UNAUTHENTICATED          (navigate "/" now)
                          ├──> DENIED_PENDING_REDIRECT  (navigate "/" after delay)
                          └──> AUTHORIZED               (render children)

Re-evaluation happens only through ``RouteGuard.update``. Any pending
denial redirect is cancelled when the inputs change or the guard is
disposed, so at most one redirect timer is alive per guard.
"""
import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from autoflow.rbac.access import AccessEvaluator
from autoflow.rbac.registry import DASHBOARD_PATH
from autoflow.rbac.session import AuthSession

logger = logging.getLogger(__name__)

DENIAL_REDIRECT_DELAY = 2.0  # seconds
REDIRECT_PATH = DASHBOARD_PATH

Navigate = Callable[[str], None]


class GuardState(str, enum.Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    DENIED_PENDING_REDIRECT = "denied_pending_redirect"
    AUTHORIZED = "authorized"


@dataclass(frozen=True)
class GuardView:
    """What the page should show for a given guard state."""
    state: GuardState
    render_children: bool = False
    role_label: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None


def resolve_guard_state(evaluator: AccessEvaluator, auth: AuthSession, path: str) -> GuardState:
    """Transition table shared by the guard and the HTTP guard endpoint."""
    if auth.is_loading:
        return GuardState.LOADING
    if not auth.is_authenticated:
        return GuardState.UNAUTHENTICATED
    if evaluator.has_access(auth.role, path):
        return GuardState.AUTHORIZED
    return GuardState.DENIED_PENDING_REDIRECT


def build_view(state: GuardState, role_label: Optional[str] = None) -> GuardView:
    if state is GuardState.AUTHORIZED:
        return GuardView(state=state, render_children=True, role_label=role_label)
    if state is GuardState.DENIED_PENDING_REDIRECT:
        return GuardView(
            state=state,
            role_label=role_label,
            title="Access Denied",
            message=f"Your role ({role_label}) does not have access to this page. "
                    "Redirecting to the dashboard...",
        )
    return GuardView(state=state)


class RouteGuard:
    """Guards one page for the lifetime of its mount.

    ``navigate`` is the router's "go to path" command. Denial redirects are
    scheduled on the running event loop (or ``loop`` when given), so a guard
    that can reach the denied state must be driven from inside a loop.
    """

    def __init__(
        self,
        evaluator: AccessEvaluator,
        navigate: Navigate,
        path: str,
        auth: Optional[AuthSession] = None,
        *,
        redirect_delay: float = DENIAL_REDIRECT_DELAY,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.evaluator = evaluator
        self.redirect_delay = redirect_delay
        self.path = path
        self.auth = auth if auth is not None else AuthSession.loading()
        self.state = GuardState.LOADING
        self._navigate = navigate
        self._loop = loop
        self._timer: Optional[asyncio.TimerHandle] = None
        self._inputs = None
        self._disposed = False
        self._evaluate()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False

    @property
    def redirect_pending(self) -> bool:
        return self._timer is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def update(self, auth: Optional[AuthSession] = None, path: Optional[str] = None) -> GuardState:
        """Feed new auth state and/or a new path; re-evaluates if anything changed."""
        if auth is not None:
            self.auth = auth
        if path is not None:
            self.path = path
        return self._evaluate()

    def render(self) -> GuardView:
        role_label = None
        if self.auth.is_authenticated:
            role_label = self.evaluator.role_display_name(self.auth.role)
        return build_view(self.state, role_label)

    def dispose(self):
        """Tear the guard down, cancelling any pending redirect."""
        self._cancel_timer()
        self._disposed = True

    def _evaluate(self) -> GuardState:
        if self._disposed:
            return self.state

        inputs = (self.auth.is_loading, self.auth.is_authenticated, self.auth.role, self.path)
        if inputs == self._inputs:
            return self.state

        state = resolve_guard_state(self.evaluator, self.auth, self.path)
        # Fail before touching any state so the guard stays consistent.
        loop = self._timer_loop() if state is GuardState.DENIED_PENDING_REDIRECT else None

        self._inputs = inputs
        self._cancel_timer()
        previous = self.state
        self.state = state
        logger.debug("Guard for %s: %s -> %s", self.path, previous.value, self.state.value)

        if self.state is GuardState.UNAUTHENTICATED and previous is not GuardState.UNAUTHENTICATED:
            self._navigate(REDIRECT_PATH)
        elif self.state is GuardState.DENIED_PENDING_REDIRECT:
            logger.info("Access denied to %s for role %s", self.path, self.auth.role.value)
            self._timer = loop.call_later(self.redirect_delay, self._redirect)
        return self.state

    def _timer_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise RuntimeError(
                "RouteGuard needs a running event loop or an explicit loop= "
                "to schedule the denial redirect"
            ) from e

    def _redirect(self):
        self._timer = None
        if self._disposed:
            return
        self._navigate(REDIRECT_PATH)

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
