from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from src.domain.services.route_guard import normalize_path
from src.infrastructure.api.dependencies import guard_route
from src.infrastructure.auth.auth_context import AuthContext

# Must be included last: it matches every GET path.
router = APIRouter()


@router.get("/{path:path}", include_in_schema=False)
def fallback(request: Request, auth: Annotated[AuthContext, Depends(guard_route)]):
    # Unknown paths are redirected by the guard; what reaches here is a known
    # page written with a trailing slash.
    return RedirectResponse(normalize_path(request.url.path), status_code=status.HTTP_303_SEE_OTHER)
