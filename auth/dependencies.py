"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The visitor's session lives in the signed cookie managed by Starlette's
SessionMiddleware; these helpers turn a Request into the objects the auth
service works with.

try_get_current_session() is the soft variant (returns None when anonymous).
get_current_session() wraps it and raises HTTP 401 if unauthenticated.
require_admin() wraps get_current_session() and raises HTTP 403 if not admin.

Layer rule: no imports from web/ or core/.
  auth/dependencies.py may import from fastapi (for HTTPException/Request)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.errors import Unauthenticated
from auth.models import Session
from auth.service import AuthService
from auth.session import SessionSlot


def get_session_slot(request: Request) -> SessionSlot:
    """Wrap request.session (populated by SessionMiddleware) in a SessionSlot."""
    return SessionSlot(request.session)


def get_auth_service(request: Request) -> AuthService:
    """Return the AuthService built by the app lifespan."""
    return request.app.state.auth_service


def try_get_current_session(request: Request) -> Session | None:
    """Return the visitor's Session, or None when anonymous. Never raises."""
    return get_auth_service(request).current(get_session_slot(request))


def get_current_session(request: Request) -> Session:
    """Require authentication. Raises HTTP 401 if the visitor has no session.

    Use as a FastAPI dependency:
        @router.get("/protected")
        async def route(session: Session = Depends(get_current_session)): ...
    """
    session = try_get_current_session(request)
    if session is None:
        raise HTTPException(
            status_code=401,
            detail={"code": Unauthenticated.code, "message": Unauthenticated.message},
        )
    return session


def require_admin(request: Request) -> Session:
    """Require admin role. Raises HTTP 401 if unauthenticated, HTTP 403 if not admin."""
    session = get_current_session(request)
    if not session.is_admin:
        raise HTTPException(
            status_code=403,
            detail={"code": "forbidden", "message": "Admin access required."},
        )
    return session
