from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
DASHBOARD_PATH = "/dashboard"

GUEST_ONLY_PATHS = frozenset({LOGIN_PATH, REGISTER_PATH})
PROTECTED_PATHS = frozenset({DASHBOARD_PATH})


class AuthState(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class GuardDecision:
    action: str  # "render", "redirect" or "wait"
    location: str | None = None

    @property
    def is_redirect(self) -> bool:
        return self.action == "redirect"


RENDER = GuardDecision("render")
WAIT = GuardDecision("wait")


def normalize_path(path: str) -> str:
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path or "/"


def home_for(state: AuthState) -> str:
    return DASHBOARD_PATH if state == AuthState.AUTHENTICATED else LOGIN_PATH


def resolve_route(path: str, state: AuthState) -> GuardDecision:
    """Decide whether ``path`` renders or redirects for the given auth state.

    Nothing is decided while the initial session fetch is still pending.
    Guest-only pages bounce signed-in users to the dashboard, protected pages
    bounce anonymous users to the login page, and any other path falls back
    to the home page of the current state.
    """
    if state == AuthState.LOADING:
        return WAIT
    path = normalize_path(path)
    authenticated = state == AuthState.AUTHENTICATED
    if path in GUEST_ONLY_PATHS:
        return GuardDecision("redirect", DASHBOARD_PATH) if authenticated else RENDER
    if path in PROTECTED_PATHS:
        return RENDER if authenticated else GuardDecision("redirect", LOGIN_PATH)
    return GuardDecision("redirect", home_for(state))
