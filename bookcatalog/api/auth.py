"""Signup, login and logout routes, plus the session gate dependency."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from bookcatalog.core.config import get_settings
from bookcatalog.core.database import get_db
from bookcatalog.core.errors import InvalidCredentialsError
from bookcatalog.core.templating import render_message, templates
from bookcatalog.schemas.auth import SessionIdentity
from bookcatalog.services.auth import AuthWorkflow, SignUpOutcome
from bookcatalog.services.credentials import CredentialStore
from bookcatalog.services.sessions import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter()


def get_auth_workflow(db: Annotated[Session, Depends(get_db)]) -> AuthWorkflow:
    """Dependency: auth workflow bound to this request's DB session."""
    return AuthWorkflow(CredentialStore(db), SessionManager(db))


def get_session_token(request: Request) -> str | None:
    """Dependency: the session token from the request cookie, if any."""
    return request.cookies.get(get_settings().SESSION_COOKIE_NAME)


def require_session(
    auth: Annotated[AuthWorkflow, Depends(get_auth_workflow)],
    token: Annotated[str | None, Depends(get_session_token)],
) -> SessionIdentity:
    """
    Dependency: the access gate. Raises LoginRequired (answered with a
    redirect to /login) before the route handler runs.
    """
    return auth.require_session(token)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "login.html", {})


@router.get("/signup", response_class=HTMLResponse)
def signup_form(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "signup.html", {})


@router.post("/signup")
def signup(
    request: Request,
    auth: Annotated[AuthWorkflow, Depends(get_auth_workflow)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    """Create an account, then send the user to the login form."""
    outcome = auth.sign_up(username, password)
    if outcome is SignUpOutcome.CONFLICT:
        return render_message(
            request,
            "Username already exists.",
            link="/signup",
            status_code=status.HTTP_409_CONFLICT,
        )
    if outcome is SignUpOutcome.INVALID:
        return render_message(
            request,
            "Signup failed.",
            link="/signup",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    if outcome is SignUpOutcome.FAILED:
        return render_message(
            request,
            "Signup failed.",
            link="/signup",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return _redirect("/login")


@router.post("/login")
def login(
    request: Request,
    auth: Annotated[AuthWorkflow, Depends(get_auth_workflow)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    """
    Check credentials and start a session.
    Unknown users and wrong passwords get the same response.
    """
    try:
        token = auth.log_in(username, password)
    except InvalidCredentialsError as e:
        return render_message(
            request,
            e.message,
            link="/login",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    settings = get_settings()
    response = _redirect("/")
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.APP_ENV == "prod",
    )
    return response


@router.get("/logout")
def logout(
    auth: Annotated[AuthWorkflow, Depends(get_auth_workflow)],
    token: Annotated[str | None, Depends(get_session_token)],
) -> RedirectResponse:
    """End the session (if any) and go back to the login form."""
    auth.log_out(token)
    response = _redirect("/login")
    response.delete_cookie(get_settings().SESSION_COOKIE_NAME)
    return response
