from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse

from src.application.dtos.common_dto import HealthResponse
from src.infrastructure.api.dependencies import RouteRedirect, SessionLoading
from src.infrastructure.api.middlewares import add_default_middlewares
from src.infrastructure.api.routes.auth_routes import router as auth_router
from src.infrastructure.api.routes.dashboard_routes import router as dashboard_router
from src.infrastructure.api.routes.fallback_routes import router as fallback_router
from src.infrastructure.api.views import render_page
from src.infrastructure.log_config import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Splitify",
        version="0.1.0",
        description="""
        ## Splitify

        Bill-splitting web application. Pages are rendered server-side with
        Jinja2; authentication and profile storage are delegated to Supabase.

        ### Pages
        - **/login**: sign in with email and password
        - **/register**: create an account
        - **/dashboard**: profile summary and billing widgets (signed-in only)

        ### Routing
        Anonymous visitors to protected pages are redirected to `/login`,
        signed-in visitors to `/login` or `/register` are redirected to
        `/dashboard`, and unknown paths redirect to whichever of the two
        applies. Redirects use `303 See Other`.
        """,
    )
    add_default_middlewares(app)

    @app.exception_handler(RouteRedirect)
    def route_redirect(request: Request, exc: RouteRedirect):
        return RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(SessionLoading)
    def session_loading(request: Request, exc: SessionLoading):
        response = render_page(request, "loading.html", status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
        response.headers["Retry-After"] = "1"
        return response

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the service is running and which auth backend it uses",
    )
    def health():
        """Check service health status."""
        use_supabase = (
            os.getenv("SUPABASE_DISABLED", "0") != "1"
            and bool(os.getenv("SUPABASE_URL"))
            and bool(os.getenv("SUPABASE_ANON_KEY"))
        )
        return {
            "status": "healthy",
            "service": "splitify",
            "auth_backend": "supabase" if use_supabase else "in-process",
        }

    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(fallback_router)
    logger.info("Splitify app created")
    return app


app = create_app()
