from __future__ import annotations

from typing import Annotated, Generator

from fastapi import Depends, Request

from src.domain.entities.session import AuthSession
from src.domain.services.route_guard import resolve_route
from src.infrastructure.auth.auth_context import AuthContext
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.supabase_client import SupabaseAuthAdapter

SESSION_TOKENS_KEY = "auth_tokens"


class RouteRedirect(Exception):
    """Raised by the route guard; turned into a 303 by the app."""

    def __init__(self, location: str) -> None:
        super().__init__(location)
        self.location = location


class SessionLoading(Exception):
    """The initial session fetch has not resolved yet."""


def get_auth_adapter() -> SupabaseAuthAdapter:
    return SupabaseAuthAdapter()


def get_auth_context(
    request: Request,
    adapter: Annotated[SupabaseAuthAdapter, Depends(get_auth_adapter)],
) -> Generator[AuthContext, None, None]:
    def persist(session: AuthSession | None) -> None:
        if session is None:
            request.session.pop(SESSION_TOKENS_KEY, None)
        else:
            request.session[SESSION_TOKENS_KEY] = session.tokens()

    with AuthContext(adapter, request.session.get(SESSION_TOKENS_KEY), on_change=persist) as auth:
        yield auth


def guard_route(
    request: Request,
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> AuthContext:
    decision = resolve_route(request.url.path, auth.state)
    if decision.action == "wait":
        raise SessionLoading()
    if decision.is_redirect:
        raise RouteRedirect(decision.location)
    return auth


def get_profile_repo(
    adapter: Annotated[SupabaseAuthAdapter, Depends(get_auth_adapter)],
) -> ProfileRepository:
    return ProfileRepository(adapter.client)
