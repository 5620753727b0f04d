"""
CertTrack Client Package
REST client, session store, route guards and screen runner
"""

from .api_client import ApiError, CertTrackClient
from .token_store import TokenStore, MemoryTokenStore
from .session_store import SessionState, SessionStore
from .guard import GuardDecision, RouteGuard, evaluate_access
from .routes import ROUTES, Route, navigate, resolve_route
from .screen import Notification, Screen

__all__ = [
    "ApiError",
    "CertTrackClient",
    "TokenStore",
    "MemoryTokenStore",
    "SessionState",
    "SessionStore",
    "GuardDecision",
    "RouteGuard",
    "evaluate_access",
    "ROUTES",
    "Route",
    "navigate",
    "resolve_route",
    "Notification",
    "Screen",
]
