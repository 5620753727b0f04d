"""
Session Store
Client-side identity: token, profile, role permissions and change listeners
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union
from loguru import logger

from client.api_client import ApiError, CertTrackClient
from client.token_store import TokenStore
from security.permissions import Permission
from security.session import SessionContext


@dataclass(frozen=True)
class SessionState:
    loading: bool = True
    profile: Optional[Dict[str, Any]] = field(default=None, compare=False)
    session: Optional[SessionContext] = None

    @property
    def authenticated(self) -> bool:
        return self.session is not None


Listener = Callable[[SessionState], None]


class SessionStore:
    """
    Owns the current identity for one client

    Every committed outcome bumps a generation counter; a request started
    under an older generation drops its result when it resolves. A failed
    login commits nothing, so it never invalidates a pending initialize.
    """

    def __init__(self, client: CertTrackClient, token_store: TokenStore):
        self.client = client
        self.token_store = token_store
        self.state = SessionState()
        self._generation = 0
        self._listeners: List[Listener] = []

    @property
    def session(self) -> Optional[SessionContext]:
        return self.state.session

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns the unsubscribe function"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SessionState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    async def _fetch_identity(self) -> SessionState:
        profile = await self.client.get_me()
        return SessionState(loading=False, profile=profile, session=SessionContext.from_profile(profile))

    async def initialize(self) -> SessionState:
        """Restore a persisted token; any failure leaves the store anonymous"""
        generation = self._next_generation()
        token = self.token_store.load()

        if not token:
            self._set_state(SessionState(loading=False))
            return self.state

        self.client.set_token(token)
        try:
            state = await self._fetch_identity()
        except (ApiError, KeyError, ValueError) as e:
            if generation != self._generation:
                return self.state
            logger.info(f"Stored session rejected: {e}")
            self.token_store.clear()
            self.client.clear_token()
            self._set_state(SessionState(loading=False))
            return self.state

        if generation != self._generation:
            return self.state
        self._set_state(state)
        return self.state

    async def login(self, email: str, password: str) -> SessionState:
        """
        Sign in and resolve the profile

        Raises:
            ApiError: sign-in or profile lookup failed; nothing is persisted
                      and the previous state is kept
        """
        generation = self._generation
        previous_token = self.client.token

        try:
            token = await self.client.sign_in(email, password)
            self.client.set_token(token)
            state = await self._fetch_identity()
        except (KeyError, ValueError) as e:
            self.client.set_token(previous_token)
            raise ApiError(f"Login failed: {e}")
        except ApiError:
            self.client.set_token(previous_token)
            raise

        if generation != self._generation:
            logger.debug("Discarding stale login result")
            self.client.set_token(self.token_store.load())
            return self.state

        self._next_generation()
        self.token_store.save(token)
        self._set_state(state)
        logger.info(f"Signed in as {state.session.email}")
        return self.state

    async def refresh(self) -> SessionState:
        """Re-fetch the profile after a role or company change"""
        if self.state.session is None:
            return self.state
        generation = self._next_generation()
        state = await self._fetch_identity()
        if generation != self._generation:
            return self.state
        self._set_state(state)
        return self.state

    def logout(self) -> SessionState:
        """Drop credential and identity; safe to call repeatedly"""
        self._next_generation()
        self.token_store.clear()
        self.client.clear_token()
        self._set_state(SessionState(loading=False))
        return self.state

    def is_admin(self) -> bool:
        return self.state.session is not None and self.state.session.is_admin

    def has_permission(self, permission: Union[Permission, str]) -> bool:
        return self.state.session is not None and self.state.session.has_permission(permission)
