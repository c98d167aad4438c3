from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from src.application.dtos.auth_dto import LoginForm, RegisterForm
from src.application.use_cases.register_user import RegisterUserUseCase, RegistrationRejected
from src.application.use_cases.sign_in_user import SignInRejected, SignInUserUseCase
from src.domain.services.route_guard import DASHBOARD_PATH, LOGIN_PATH
from src.infrastructure.api.dependencies import get_auth_context, get_profile_repo, guard_route
from src.infrastructure.api.views import push_toast, render_page
from src.infrastructure.auth.auth_context import AuthContext
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.supabase_client import AuthProviderError

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Authentication"],
    default_response_class=HTMLResponse,
)


@router.get(
    "/login",
    summary="Sign-in Page",
    description="Render the sign-in form. Signed-in users are sent to the dashboard.",
)
def login_page(request: Request, auth: Annotated[AuthContext, Depends(guard_route)]):
    return render_page(request, "login.html", {"email": ""})


@router.post(
    "/login",
    summary="Sign In",
    description="""
    Sign in with email and password.

    - Missing fields are rejected before contacting the auth provider (400)
    - Wrong credentials re-render the form with a notification (401)
    - Success redirects to the dashboard (303)
    """,
)
def login_submit(
    request: Request,
    form: Annotated[LoginForm, Form()],
    auth: Annotated[AuthContext, Depends(guard_route)],
):
    try:
        SignInUserUseCase(auth).execute(form)
    except SignInRejected as exc:
        push_toast(request, str(exc))
        return render_page(request, "login.html", {"email": form.email}, status.HTTP_400_BAD_REQUEST)
    except AuthProviderError as exc:
        logger.info("Sign-in rejected by provider: %s", exc)
        push_toast(request, "Incorrect email or password")
        return render_page(request, "login.html", {"email": form.email}, status.HTTP_401_UNAUTHORIZED)
    return RedirectResponse(DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    "/register",
    summary="Registration Page",
    description="Render the create-account form. Signed-in users are sent to the dashboard.",
)
def register_page(request: Request, auth: Annotated[AuthContext, Depends(guard_route)]):
    return render_page(request, "register.html", {"form": RegisterForm().echo()})


@router.post(
    "/register",
    summary="Create Account",
    description="""
    Create an account with the auth provider and its profile record.

    **Validation** (checked in order, before any provider call):
    - every field present and not whitespace only
    - a well-formed email address
    - a password of 8-16 characters with an uppercase letter, a lowercase
      letter, a digit and a special character
    - a matching confirmation
    """,
)
def register_submit(
    request: Request,
    form: Annotated[RegisterForm, Form()],
    auth: Annotated[AuthContext, Depends(guard_route)],
    profiles: Annotated[ProfileRepository, Depends(get_profile_repo)],
):
    try:
        result = RegisterUserUseCase(auth, profiles).execute(form)
    except RegistrationRejected as exc:
        push_toast(request, str(exc))
        return render_page(request, "register.html", {"form": form.echo()}, status.HTTP_400_BAD_REQUEST)
    except AuthProviderError as exc:
        logger.info("Sign-up rejected by provider: %s", exc)
        push_toast(request, str(exc))
        return render_page(request, "register.html", {"form": form.echo()}, status.HTTP_400_BAD_REQUEST)

    if result.session is None:
        push_toast(request, "Account created! Check your email to confirm your account.", kind="success")
        return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    push_toast(request, "Account created!", kind="success")
    return RedirectResponse(DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.post(
    "/logout",
    summary="Sign Out",
    description="End the provider session. The next guarded page lands on the sign-in form.",
)
def logout(request: Request, auth: Annotated[AuthContext, Depends(get_auth_context)]):
    if auth.user is not None:
        try:
            auth.sign_out()
        except AuthProviderError as exc:
            logger.warning("Sign-out failed: %s", exc)
            push_toast(request, str(exc))
    return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
