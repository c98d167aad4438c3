import pytest

from src.domain.services.route_guard import AuthState, normalize_path, resolve_route

AUTH = AuthState.AUTHENTICATED
ANON = AuthState.UNAUTHENTICATED


def test_loading_waits_everywhere():
    for path in ("/login", "/dashboard", "/elsewhere"):
        assert resolve_route(path, AuthState.LOADING).action == "wait"


def test_anonymous_dashboard_redirects_to_login():
    decision = resolve_route("/dashboard", ANON)
    assert decision.is_redirect
    assert decision.location == "/login"


@pytest.mark.parametrize("path", ["/login", "/register"])
def test_signed_in_guest_pages_redirect_to_dashboard(path):
    decision = resolve_route(path, AUTH)
    assert decision.is_redirect
    assert decision.location == "/dashboard"


@pytest.mark.parametrize("path", ["/login", "/register"])
def test_anonymous_guest_pages_render(path):
    assert resolve_route(path, ANON).action == "render"


def test_signed_in_dashboard_renders():
    assert resolve_route("/dashboard", AUTH).action == "render"


@pytest.mark.parametrize("path", ["/", "/bills", "/dashboard/extra"])
def test_unknown_paths_follow_state(path):
    assert resolve_route(path, AUTH).location == "/dashboard"
    assert resolve_route(path, ANON).location == "/login"


def test_trailing_slash_ignored():
    assert normalize_path("/login/") == "/login"
    assert normalize_path("/") == "/"
    assert normalize_path("") == "/"
    assert resolve_route("/dashboard/", ANON).location == "/login"
