from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

logger = logging.getLogger(__name__)

DEV_SECRET_KEY = "splitify-dev-secret-change-me"
TWO_WEEKS = 14 * 24 * 60 * 60


def add_default_middlewares(app: FastAPI) -> None:
    env = os.getenv("ENV", "development")

    if env in ("development", "staging"):
        allowed_origins = [
            "http://localhost:8000",
            "http://localhost:5173",  # Vite default
            "http://127.0.0.1:8000",
            "http://127.0.0.1:5173",
        ]
    else:
        allowed_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Signed cookie holding the provider tokens and pending toasts
    secret_key = os.getenv("SESSION_SECRET_KEY", DEV_SECRET_KEY)
    if secret_key == DEV_SECRET_KEY and env == "production":
        logger.warning("SESSION_SECRET_KEY is not set; using the development key")
    app.add_middleware(
        SessionMiddleware,
        secret_key=secret_key,
        session_cookie="splitify_session",
        max_age=int(os.getenv("SESSION_MAX_AGE", str(TWO_WEEKS))),
        same_site="lax",
        https_only=env == "production",
    )
