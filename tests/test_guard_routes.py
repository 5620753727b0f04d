import uuid

import pytest

from client.guard import AUTHORIZED, LOADING, NOT_FOUND, REDIRECT, GuardDecision, RouteGuard, evaluate_access
from client.routes import navigate, resolve_route
from client.session_store import SessionState, SessionStore
from client.token_store import MemoryTokenStore
from security.permissions import Permission
from security.session import SessionContext


def _state(*permissions, loading=False, anonymous=False):
    if anonymous:
        return SessionState(loading=loading)
    session = SessionContext(
        user_id=uuid.uuid4(),
        company_id=uuid.uuid4(),
        permissions=frozenset(permissions),
    )
    return SessionState(loading=loading, session=session)


def test_loading_yields_no_decision():
    assert evaluate_access(SessionState()).outcome == LOADING
    assert evaluate_access(_state(loading=True, anonymous=True), require_admin=True).is_loading


def test_anonymous_redirects_to_login():
    assert evaluate_access(_state(anonymous=True)) == GuardDecision(REDIRECT, "/login")


def test_missing_permission_redirects_to_unauthorized():
    decision = evaluate_access(_state(Permission.VIEW_REPORTS), required_permission=Permission.MANAGE_ROLES)
    assert decision == GuardDecision(REDIRECT, "/unauthorized")


def test_admin_flag_uses_manage_users():
    assert evaluate_access(_state(Permission.MANAGE_ROLES), require_admin=True).target == "/unauthorized"
    assert evaluate_access(_state(Permission.MANAGE_USERS), require_admin=True).is_authorized


@pytest.mark.parametrize("path, permissions, expected", [
    ("/certificates", (), GuardDecision(AUTHORIZED)),
    ("/dashboard", (), GuardDecision(AUTHORIZED)),
    ("/settings/", (), GuardDecision(AUTHORIZED)),
    ("/employees", (), GuardDecision(REDIRECT, "/unauthorized")),
    ("/users", (Permission.MANAGE_USERS,), GuardDecision(AUTHORIZED)),
    ("/roles", (Permission.MANAGE_ROLES,), GuardDecision(AUTHORIZED)),
    ("/analytics", (Permission.VIEW_REPORTS,), GuardDecision(REDIRECT, "/unauthorized")),
    ("/", (), GuardDecision(REDIRECT, "/certificates")),
    ("/login", (), GuardDecision(REDIRECT, "/certificates")),
    ("/unauthorized", (), GuardDecision(AUTHORIZED)),
    ("/nowhere", (), GuardDecision(NOT_FOUND)),
])
def test_navigate_signed_in(path, permissions, expected):
    assert navigate(_state(*permissions), path) == expected


def test_navigate_anonymous():
    anonymous = _state(anonymous=True)

    assert navigate(anonymous, "/login").is_authorized
    assert navigate(anonymous, "/signup?ref=mail").is_authorized
    assert navigate(anonymous, "/roles") == GuardDecision(REDIRECT, "/login")


def test_resolve_route():
    assert resolve_route("/roles").required_permission == Permission.MANAGE_ROLES
    assert resolve_route("/analytics").require_admin
    assert resolve_route("/missing") is None


class _NoClient:
    token = None

    def set_token(self, token):
        self.token = token

    def clear_token(self):
        self.token = None


def test_route_guard_reevaluates_on_session_change():
    store = SessionStore(_NoClient(), MemoryTokenStore())
    changes = []
    guard = RouteGuard(store, required_permission=Permission.MANAGE_ROLES, on_change=changes.append)

    assert guard.decision.is_loading

    store._set_state(_state(Permission.MANAGE_ROLES))
    assert guard.decision.is_authorized

    store.logout()
    assert guard.decision == GuardDecision(REDIRECT, "/login")
    assert [d.outcome for d in changes] == [AUTHORIZED, REDIRECT]

    guard.close()
    store._set_state(_state(Permission.MANAGE_ROLES))
    assert guard.decision.outcome == REDIRECT
