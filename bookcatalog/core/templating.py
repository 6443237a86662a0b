"""Jinja2 template environment for the HTML views."""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

PACKAGE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_message(
    request: Request,
    message: str,
    *,
    link: str,
    link_text: str = "Try again",
    status_code: int = 200,
) -> HTMLResponse:
    """Render a one-line outcome page with a single follow-up link."""
    return templates.TemplateResponse(
        request,
        "message.html",
        {"message": message, "link": link, "link_text": link_text},
        status_code=status_code,
    )
