"""Template rendering and one-shot toast notifications."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from src.application.dtos.common_dto import Toast

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
TOASTS_KEY = "toasts"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def push_toast(request: Request, message: str, kind: str = "error") -> None:
    request.session.setdefault(TOASTS_KEY, []).append(Toast(kind=kind, message=message).model_dump())


def pop_toasts(request: Request) -> list[Toast]:
    return [Toast(**raw) for raw in request.session.pop(TOASTS_KEY, [])]


def render_page(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render ``name`` with any pending toasts, which are consumed here."""
    page_context = {"toasts": pop_toasts(request), **(context or {})}
    return templates.TemplateResponse(request, name, page_context, status_code=status_code)
