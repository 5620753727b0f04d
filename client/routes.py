"""
Route Table
Client screens and the access each one needs
"""

from dataclasses import dataclass
from typing import Dict, Optional

from client.guard import AUTHORIZED, NOT_FOUND, REDIRECT, GuardDecision, evaluate_access
from client.session_store import SessionState
from security.permissions import Permission

HOME_PATH = "/certificates"


@dataclass(frozen=True)
class Route:
    path: str
    public: bool = False
    required_permission: Optional[Permission] = None
    require_admin: bool = False
    redirect_to: Optional[str] = None
    # login/signup bounce signed-in visitors to the home screen
    anonymous_only: bool = False


ROUTES: Dict[str, Route] = {
    route.path: route
    for route in (
        Route("/login", public=True, anonymous_only=True),
        Route("/signup", public=True, anonymous_only=True),
        Route("/unauthorized", public=True),
        Route("/", redirect_to=HOME_PATH),
        Route("/dashboard"),
        Route("/certificates"),
        Route("/settings"),
        Route("/employees", required_permission=Permission.MANAGE_USERS),
        Route("/users", required_permission=Permission.MANAGE_USERS),
        Route("/roles", required_permission=Permission.MANAGE_ROLES),
        Route("/analytics", require_admin=True),
    )
}


def resolve_route(path: str) -> Optional[Route]:
    path = path.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return ROUTES.get(path or "/")


def navigate(state: SessionState, path: str) -> GuardDecision:
    """Resolve a path and apply its guard"""
    route = resolve_route(path)
    if route is None:
        return GuardDecision(NOT_FOUND)

    if route.redirect_to:
        return GuardDecision(REDIRECT, route.redirect_to)

    if route.public:
        if route.anonymous_only and not state.loading and state.authenticated:
            return GuardDecision(REDIRECT, HOME_PATH)
        return GuardDecision(AUTHORIZED)

    return evaluate_access(state, route.required_permission, route.require_admin)
