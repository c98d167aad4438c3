"""Request-scoped mirror of the auth provider session.

``AuthContext`` fetches the session once when opened, then follows the
provider's auth-state-change events until it is closed. Both paths write
the same ``user`` cell; the most recent write wins.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

from src.domain.entities.session import AuthSession, AuthUser
from src.domain.services.route_guard import AuthState
from src.infrastructure.database.supabase_client import (
    SignUpResult,
    SupabaseAuthAdapter,
    Subscription,
)

logger = logging.getLogger(__name__)

SessionListener = Callable[[AuthSession | None], None]


class AuthContext:
    def __init__(
        self,
        adapter: SupabaseAuthAdapter,
        tokens: dict[str, str] | None = None,
        on_change: SessionListener | None = None,
    ) -> None:
        self.adapter = adapter
        self.user: AuthUser | None = None
        self.loading = True
        self._tokens = tokens
        self._on_change = on_change
        self._subscription: Subscription | None = None

    def __enter__(self) -> "AuthContext":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def state(self) -> AuthState:
        if self.loading:
            return AuthState.LOADING
        return AuthState.AUTHENTICATED if self.user is not None else AuthState.UNAUTHENTICATED

    def open(self) -> "AuthContext":
        session = self.adapter.get_session(self._tokens)
        if session is not None or self._tokens:
            # a stale cookie is cleared here as well
            self._apply(session)
        self.loading = False
        self._subscription = self.adapter.subscribe(self._handle_event)
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _handle_event(self, event: str, session: AuthSession | None) -> None:
        logger.debug("Auth state change: %s", event)
        self._apply(session)

    def _apply(self, session: AuthSession | None) -> None:
        self.user = session.user if session is not None else None
        if self._on_change is not None:
            self._on_change(session)

    def _require_open(self) -> None:
        if self._subscription is None:
            raise RuntimeError("AuthContext must be opened before use")

    def sign_up(self, email: str, password: str, profile: dict[str, str]) -> SignUpResult:
        self._require_open()
        metadata = {
            "first_name": profile.get("first_name"),
            "last_name": profile.get("last_name"),
            "nickname": profile.get("nickname"),
            "username": profile.get("username"),
        }
        return self.adapter.sign_up(email, password, metadata)

    def sign_in(self, email: str, password: str) -> AuthSession:
        self._require_open()
        return self.adapter.sign_in(email, password)

    def sign_out(self) -> None:
        self._require_open()
        self.adapter.sign_out()
