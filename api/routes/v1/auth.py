"""
api/routes/v1/auth.py -- Authentication REST endpoints.

Routes:
  POST /api/v1/auth/login    -- password login; stores the session snapshot
  POST /api/v1/auth/signup   -- self-registration (role "user"); logs the new user in
  POST /api/v1/auth/logout   -- clears the session slot
  GET  /api/v1/auth/me       -- current session (requires auth)
  GET  /api/v1/auth/landing  -- landing projection; all_users only for admins
  GET  /api/v1/auth/users    -- list all identities (admin only)

The session is the same signed cookie the web UI uses, so a browser that
logged in through /login is also authenticated here.

Security:
  Login returns the same "invalid_credentials" error for an unknown email and
  a wrong password; AuthService.login() also equalizes timing between them.
  Cache-Control: no-store on login and signup responses.

Route handlers are plain `def` so FastAPI runs them in its thread pool and
bcrypt never blocks the event loop.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from api.models import (
    IdentityResponse,
    LandingResponse,
    LoginRequest,
    MessageResponse,
    SessionResponse,
    SignupRequest,
)
from auth.dependencies import get_auth_service, get_current_session, get_session_slot, require_admin
from auth.errors import AuthError, EmailTaken, InvalidCredentials, SessionTeardownFailed, SignupFailed
from auth.models import Session
from auth.service import AuthService
from auth.session import SessionSlot

# Auth policy:
# - POST /api/v1/auth/login:    public
# - POST /api/v1/auth/signup:   public
# - POST /api/v1/auth/logout:   public -- clearing an empty slot is a no-op
# - GET  /api/v1/auth/me:       requires auth (get_current_session)
# - GET  /api/v1/auth/landing:  requires auth (get_current_session)
# - GET  /api/v1/auth/users:    requires admin (require_admin)
router = APIRouter()

_STATUS_BY_ERROR: dict[type[AuthError], int] = {
    InvalidCredentials: 401,
    EmailTaken: 409,
    SignupFailed: 500,
    SessionTeardownFailed: 500,
}


def _http_error(exc: AuthError, headers: dict[str, str] | None = None) -> HTTPException:
    return HTTPException(
        status_code=_STATUS_BY_ERROR.get(type(exc), 400),
        detail={"code": exc.code, "message": exc.message},
        headers=headers,
    )


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@router.post("/auth/login", response_model=SessionResponse)
def login(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    slot: SessionSlot = Depends(get_session_slot),
) -> JSONResponse:
    """Authenticate with email and password."""
    try:
        session = service.login(slot, body.email, body.password)
    except InvalidCredentials as exc:
        raise _http_error(exc, headers={"Cache-Control": "no-store"}) from exc

    resp = JSONResponse(status_code=200, content=SessionResponse.from_session(session).model_dump(mode="json"))
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/auth/signup", response_model=SessionResponse, status_code=201)
def signup(
    body: SignupRequest,
    service: AuthService = Depends(get_auth_service),
    slot: SessionSlot = Depends(get_session_slot),
) -> JSONResponse:
    """Create a "user" account and log it in.

    409 when the email is already registered, 500 when hashing fails.
    """
    try:
        session = service.signup(slot, body.email, body.username, body.password)
    except (EmailTaken, SignupFailed) as exc:
        raise _http_error(exc) from exc

    resp = JSONResponse(status_code=201, content=SessionResponse.from_session(session).model_dump(mode="json"))
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/auth/logout", response_model=MessageResponse)
def logout(
    service: AuthService = Depends(get_auth_service),
    slot: SessionSlot = Depends(get_session_slot),
) -> MessageResponse:
    """Clear the session. Safe to call when already logged out."""
    try:
        service.logout(slot)
    except SessionTeardownFailed as exc:
        raise _http_error(exc) from exc
    return MessageResponse(message="Logged out.")


# ---------------------------------------------------------------------------
# Authenticated endpoints
# ---------------------------------------------------------------------------


@router.get("/auth/me", response_model=SessionResponse)
def me(session: Session = Depends(get_current_session)) -> SessionResponse:
    """Return the current session snapshot."""
    return SessionResponse.from_session(session)


@router.get("/auth/landing", response_model=LandingResponse, response_model_exclude_none=True)
def landing(
    session: Session = Depends(get_current_session),
    service: AuthService = Depends(get_auth_service),
) -> LandingResponse:
    """Return the landing projection: the session, plus every identity for admins."""
    view = service.view_for(session)
    all_users = None
    if view.identities is not None:
        all_users = [IdentityResponse.from_public(i) for i in view.identities]
    return LandingResponse(user=SessionResponse.from_session(view.session), all_users=all_users)


@router.get("/auth/users", response_model=list[IdentityResponse])
def list_users(
    session: Session = Depends(require_admin),
    service: AuthService = Depends(get_auth_service),
) -> list[IdentityResponse]:
    """List all identities. Admin only."""
    return [IdentityResponse.from_public(i) for i in service.store.list_public()]
