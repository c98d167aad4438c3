from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass
from typing import Any, Callable

from supabase import AuthError, Client, ClientOptions, create_client

from src.domain.entities.session import AuthSession, AuthUser

logger = logging.getLogger(__name__)

AuthListener = Callable[[str, AuthSession | None], None]


class AuthProviderError(RuntimeError):
    """Failure reported by the auth provider; the message is user-facing."""


@dataclass(slots=True)
class SignUpResult:
    user: AuthUser
    session: AuthSession | None  # None while e-mail confirmation is pending


@dataclass(slots=True)
class Subscription:
    unsubscribe: Callable[[], None]


MAX_FAKE_SESSIONS_PER_USER = 5


class _FakeAuthStore:
    """Process-wide user and session tables used when Supabase is disabled."""

    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}
        self.sessions: dict[str, AuthSession] = {}

    def reset(self) -> None:
        self.users.clear()
        self.sessions.clear()

    def create_user(self, email: str, password: str, metadata: dict[str, Any]) -> AuthUser:
        key = email.lower()
        if key in self.users:
            raise AuthProviderError("User already registered")
        user = AuthUser(id=str(uuid.uuid4()), email=email, metadata=dict(metadata))
        self.users[key] = {"password": password, "user": user}
        return user

    def authenticate(self, email: str, password: str) -> AuthUser:
        record = self.users.get(email.lower())
        if record is None or record["password"] != password:
            raise AuthProviderError("Invalid login credentials")
        return record["user"]

    def issue(self, user: AuthUser) -> AuthSession:
        session = AuthSession(
            access_token=f"fake-access-{uuid.uuid4().hex}",
            refresh_token=f"fake-refresh-{uuid.uuid4().hex}",
            user=user,
        )
        owned = [token for token, s in self.sessions.items() if s.user.id == user.id]
        # oldest first; keep room for the new one
        for token in owned[: max(0, len(owned) - MAX_FAKE_SESSIONS_PER_USER + 1)]:
            del self.sessions[token]
        self.sessions[session.access_token] = session
        return session

    def restore(self, access_token: str, refresh_token: str) -> AuthSession | None:
        session = self.sessions.get(access_token)
        if session is None or session.refresh_token != refresh_token:
            return None
        return session

    def revoke(self, access_token: str) -> None:
        self.sessions.pop(access_token, None)


_FAKE_STORE = _FakeAuthStore()


def reset_fake_auth_store() -> None:
    _FAKE_STORE.reset()


def _to_session(session: Any) -> AuthSession | None:
    if session is None or getattr(session, "user", None) is None:
        return None
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user=_to_user(session.user),
    )


def _to_user(user: Any) -> AuthUser:
    return AuthUser(id=user.id, email=user.email, metadata=dict(user.user_metadata or {}))


class SupabaseAuthAdapter:
    """Per-request wrapper around Supabase Auth.

    Every adapter owns its own client so that one browser's session never
    leaks into another request. When SUPABASE_DISABLED=1, or credentials are
    missing, an in-process fake with the same contract is used instead and
    auth-state events are pushed to subscribers by the adapter itself.
    """

    def __init__(self) -> None:
        self.disabled = os.getenv("SUPABASE_DISABLED", "0") == "1"
        self.url = os.getenv("SUPABASE_URL")
        self.key = os.getenv("SUPABASE_ANON_KEY")
        self._client: Client | None = None
        self._listeners: list[AuthListener] = []
        self._current: AuthSession | None = None
        if not self.disabled:
            if self.url and self.key:
                self._client = create_client(
                    self.url,
                    self.key,
                    options=ClientOptions(persist_session=False, auto_refresh_token=False),
                )
            else:
                logger.warning("SUPABASE_URL/SUPABASE_ANON_KEY not set; using in-process auth store")

    @property
    def client(self) -> Client | None:
        return self._client

    @property
    def is_fake(self) -> bool:
        return self.disabled or self._client is None

    def _emit(self, event: str, session: AuthSession | None) -> None:
        self._current = session
        for listener in list(self._listeners):
            listener(event, session)

    def get_session(self, tokens: dict[str, str] | None) -> AuthSession | None:
        """Restore the session described by the cookie tokens, if still valid."""
        if not tokens or not tokens.get("access_token") or not tokens.get("refresh_token"):
            return None
        if self.is_fake:
            self._current = _FAKE_STORE.restore(tokens["access_token"], tokens["refresh_token"])
            return self._current
        try:
            res = self._client.auth.set_session(tokens["access_token"], tokens["refresh_token"])
        except AuthError as exc:
            logger.warning("Stored session could not be restored: %s", exc)
            return None
        return _to_session(res.session)

    def subscribe(self, callback: AuthListener) -> Subscription:
        if self.is_fake:
            self._listeners.append(callback)

            def unsubscribe() -> None:
                if callback in self._listeners:
                    self._listeners.remove(callback)

            return Subscription(unsubscribe=unsubscribe)

        def relay(event: Any, session: Any) -> None:
            callback(str(getattr(event, "value", event)), _to_session(session))

        sub = self._client.auth.on_auth_state_change(relay)
        return Subscription(unsubscribe=sub.unsubscribe)

    def sign_up(self, email: str, password: str, metadata: dict[str, Any]) -> SignUpResult:
        if self.is_fake:
            user = _FAKE_STORE.create_user(email, password, metadata)
            session = _FAKE_STORE.issue(user)
            self._emit("SIGNED_IN", session)
            return SignUpResult(user=user, session=session)
        try:
            res = self._client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata}}
            )
        except AuthError as exc:
            raise AuthProviderError(str(exc)) from exc
        if res.user is None:
            raise AuthProviderError("Failed to create account")
        return SignUpResult(user=_to_user(res.user), session=_to_session(res.session))

    def sign_in(self, email: str, password: str) -> AuthSession:
        if self.is_fake:
            session = _FAKE_STORE.issue(_FAKE_STORE.authenticate(email, password))
            self._emit("SIGNED_IN", session)
            return session
        try:
            res = self._client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as exc:
            raise AuthProviderError(str(exc)) from exc
        session = _to_session(res.session)
        if session is None:
            raise AuthProviderError("Invalid login credentials")
        return session

    def sign_out(self) -> None:
        if self.is_fake:
            if self._current is not None:
                _FAKE_STORE.revoke(self._current.access_token)
            self._emit("SIGNED_OUT", None)
            return
        try:
            self._client.auth.sign_out()
        except AuthError as exc:
            raise AuthProviderError(str(exc)) from exc
