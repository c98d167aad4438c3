from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from src.application.use_cases.load_dashboard import LoadDashboardUseCase
from src.infrastructure.api.dependencies import get_profile_repo, guard_route
from src.infrastructure.api.views import push_toast, render_page
from src.infrastructure.auth.auth_context import AuthContext
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

router = APIRouter(tags=["Dashboard"], default_response_class=HTMLResponse)


@router.get(
    "/dashboard",
    summary="Dashboard",
    description="Profile summary and billing widgets for the signed-in user.",
)
def dashboard(
    request: Request,
    auth: Annotated[AuthContext, Depends(guard_route)],
    profiles: Annotated[ProfileRepository, Depends(get_profile_repo)],
):
    view = LoadDashboardUseCase(profiles).execute(auth.user)
    if not view.profile_loaded:
        push_toast(request, "Failed to load profile")
    return render_page(request, "dashboard.html", {"view": view})
