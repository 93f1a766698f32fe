"""
web/routes.py -- Jinja2 template routes for the user management web UI.

These routes serve server-rendered HTML. They share app.state with the API
routes (same AuthService, same in-memory store) and the same session cookie,
but render pages and issue redirects instead of returning JSON.

Routes:
  GET  /         -- home page; authenticated visitors are sent to /landing
  GET  /login    -- login form
  POST /login    -- handle login; redirect /landing or re-render with error
  GET  /signup   -- signup form
  POST /signup   -- handle signup; redirect /landing or re-render with error
  GET  /landing  -- landing page (auth required); admins also see every user
  POST /logout   -- clear the session, redirect /

Form handlers are plain `def` so the bcrypt work runs in the thread pool.
Form fields default to "" so a blank or missing field reaches AuthService
and gets a re-rendered page, never a JSON validation error.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Form, Request, Response
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from auth.dependencies import get_auth_service, get_session_slot
from auth.errors import EmailTaken, InvalidCredentials, SessionTeardownFailed, SignupFailed, Unauthenticated

logger = logging.getLogger("usermgmt.web")

STATIC_DIR = Path(__file__).parent / "static"
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
router = APIRouter()


def _render(request: Request, template_name: str, error_msg: Optional[str] = None, **ctx) -> HTMLResponse:
    """TemplateResponse wrapper injecting the current session and error message."""
    context = {
        "current_user": get_auth_service(request).current(get_session_slot(request)),
        "error_msg": error_msg,
        **ctx,
    }
    return templates.TemplateResponse(request, template_name, context)


# ---------------------------------------------------------------------------
# GET / -- home page
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
def home(request: Request) -> HTMLResponse:
    if get_auth_service(request).current(get_session_slot(request)) is not None:
        return RedirectResponse("/landing", status_code=302)
    return _render(request, "index.html")


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request) -> HTMLResponse:
    return _render(request, "login.html")


@router.post("/login", response_class=HTMLResponse)
def login_post(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
) -> HTMLResponse:
    """Handle the login form. Unknown email, wrong password and blank fields look identical."""
    service = get_auth_service(request)
    try:
        service.login(get_session_slot(request), email, password)
    except InvalidCredentials as exc:
        return _render(request, "login.html", error_msg=exc.message)
    resp = RedirectResponse("/landing", status_code=302)
    resp.headers["Cache-Control"] = "no-store"
    return resp


# ---------------------------------------------------------------------------
# Signup
# ---------------------------------------------------------------------------


@router.get("/signup", response_class=HTMLResponse)
def signup_form(request: Request) -> HTMLResponse:
    return _render(request, "signup.html")


@router.post("/signup", response_class=HTMLResponse)
def signup_post(
    request: Request,
    email: str = Form(""),
    username: str = Form(""),
    password: str = Form(""),
) -> HTMLResponse:
    """Handle the signup form and log the new account in."""
    service = get_auth_service(request)
    try:
        service.signup(get_session_slot(request), email, username, password)
    except (EmailTaken, SignupFailed) as exc:
        return _render(request, "signup.html", error_msg=exc.message)
    resp = RedirectResponse("/landing", status_code=302)
    resp.headers["Cache-Control"] = "no-store"
    return resp


# ---------------------------------------------------------------------------
# GET /landing -- user or admin dashboard
# ---------------------------------------------------------------------------


@router.get("/landing", response_class=HTMLResponse)
def landing(request: Request) -> HTMLResponse:
    try:
        view = get_auth_service(request).landing(get_session_slot(request))
    except Unauthenticated:
        return RedirectResponse("/login", status_code=302)
    return _render(request, "landing.html", user=view.session, all_users=view.identities)


# ---------------------------------------------------------------------------
# POST /logout
# ---------------------------------------------------------------------------


@router.post("/logout")
def logout(request: Request) -> Response:
    try:
        get_auth_service(request).logout(get_session_slot(request))
    except SessionTeardownFailed as exc:
        logger.exception("Session teardown failed")
        return PlainTextResponse(exc.message, status_code=500)
    return RedirectResponse("/", status_code=302)
