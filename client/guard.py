"""
Authorization Guard
Decides whether the current session may open a protected screen
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from client.session_store import SessionState, SessionStore
from security.permissions import Permission

LOGIN_PATH = "/login"
UNAUTHORIZED_PATH = "/unauthorized"

LOADING = "loading"
AUTHORIZED = "authorized"
REDIRECT = "redirect"
NOT_FOUND = "not_found"


@dataclass(frozen=True)
class GuardDecision:
    outcome: str
    target: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.outcome == LOADING

    @property
    def is_authorized(self) -> bool:
        return self.outcome == AUTHORIZED


def evaluate_access(
    state: SessionState,
    required_permission: Optional[Union[Permission, str]] = None,
    require_admin: bool = False
) -> GuardDecision:
    """
    Gate one protected screen

    Args:
        state: Current session state
        required_permission: Permission the screen needs, if any
        require_admin: Screen is admin-only

    Returns:
        loading while identity is unresolved, a redirect to /login for
        anonymous visitors, a redirect to /unauthorized when the permission
        or admin check fails, otherwise authorized
    """
    if state.loading:
        return GuardDecision(LOADING)

    session = state.session
    if session is None:
        return GuardDecision(REDIRECT, LOGIN_PATH)

    if required_permission is not None and not session.has_permission(required_permission):
        return GuardDecision(REDIRECT, UNAUTHORIZED_PATH)

    if require_admin and not session.is_admin:
        return GuardDecision(REDIRECT, UNAUTHORIZED_PATH)

    return GuardDecision(AUTHORIZED)


class RouteGuard:
    """Keeps one screen's decision current as the session changes"""

    def __init__(
        self,
        store: SessionStore,
        required_permission: Optional[Union[Permission, str]] = None,
        require_admin: bool = False,
        on_change: Optional[Callable[[GuardDecision], None]] = None
    ):
        self.required_permission = required_permission
        self.require_admin = require_admin
        self.on_change = on_change
        self.decision = evaluate_access(store.state, required_permission, require_admin)
        self._unsubscribe = store.subscribe(self._on_session_change)

    def _on_session_change(self, state: SessionState) -> None:
        decision = evaluate_access(state, self.required_permission, self.require_admin)
        if decision == self.decision:
            return
        self.decision = decision
        if self.on_change:
            self.on_change(decision)

    def close(self) -> None:
        self._unsubscribe()
